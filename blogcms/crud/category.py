"""CRUD operations for Category."""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blogcms.core.exceptions import BlogError, NotFoundError, ResourceInUseError
from blogcms.crud.base import CRUDBase
from blogcms.models.category import Category
from blogcms.models.post import Post
from blogcms.schemas.category import CategoryCreate, CategoryUpdate, CategoryWithPostCount
from blogcms.utils.text import slugify

logger = logging.getLogger(__name__)


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""

    entity_name = "Category"
    unique_message = "A category with this slug already exists"

    def get_by_slug(self, db: Session, slug: str) -> Optional[Category]:
        stmt = select(Category).where(Category.slug == slug).limit(1)
        return db.scalars(stmt).first()

    def get_by_slug_or_raise(self, db: Session, slug: str) -> Category:
        category = self.get_by_slug(db, slug)
        if category is None:
            raise NotFoundError(self.entity_name, slug)
        return category

    def get_all_with_post_count(self, db: Session) -> List[CategoryWithPostCount]:
        categories = db.scalars(select(Category).order_by(Category.name, Category.id)).all()
        counts = dict(db.execute(
            select(Post.category_id, func.count(Post.id)).group_by(Post.category_id)
        ).all())
        return [
            CategoryWithPostCount.model_validate(category).model_copy(
                update={"post_count": counts.get(category.id, 0)}
            )
            for category in categories
        ]

    def create_category(self, db: Session, *, category_in: CategoryCreate) -> Category:
        slug = category_in.slug or slugify(category_in.name)
        if not slug:
            raise BlogError("Could not derive a slug from the name; please provide one")
        return self.create(db, obj_in={"name": category_in.name.strip(), "slug": slug})

    def delete_category(self, db: Session, *, category_id: int) -> Category:
        """Delete a category that no post uses."""
        category = self.get_or_raise(db, category_id)
        in_use = db.scalar(select(func.count(Post.id)).where(Post.category_id == category_id)) or 0
        if in_use:
            raise ResourceInUseError(
                f"Cannot delete category because it's used by {in_use} posts"
            )
        db.delete(category)
        self.commit(db)
        logger.info(f"[CATEGORY] Deleted category id={category_id}")
        return category


# Singleton instance
crud_category = CRUDCategory(Category)
