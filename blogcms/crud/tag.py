"""CRUD operations for Tag."""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blogcms.core.exceptions import BlogError, NotFoundError, ResourceInUseError
from blogcms.crud.base import CRUDBase
from blogcms.models.post_tag import PostTag
from blogcms.models.tag import Tag
from blogcms.schemas.tag import TagCreate, TagUpdate, TagWithPostCount
from blogcms.utils.text import slugify

logger = logging.getLogger(__name__)


class CRUDTag(CRUDBase[Tag, TagCreate, TagUpdate]):
    """CRUD operations for Tag."""

    entity_name = "Tag"
    unique_message = "A tag with this slug already exists"

    def get_by_slug(self, db: Session, slug: str) -> Optional[Tag]:
        stmt = select(Tag).where(Tag.slug == slug).limit(1)
        return db.scalars(stmt).first()

    def get_by_slug_or_raise(self, db: Session, slug: str) -> Tag:
        tag = self.get_by_slug(db, slug)
        if tag is None:
            raise NotFoundError(self.entity_name, slug)
        return tag

    def get_all_with_post_count(self, db: Session) -> List[TagWithPostCount]:
        tags = db.scalars(select(Tag).order_by(Tag.name, Tag.id)).all()
        counts = dict(db.execute(
            select(PostTag.tag_id, func.count()).group_by(PostTag.tag_id)
        ).all())
        return [
            TagWithPostCount.model_validate(tag).model_copy(
                update={"post_count": counts.get(tag.id, 0)}
            )
            for tag in tags
        ]

    def create_tag(self, db: Session, *, tag_in: TagCreate) -> Tag:
        slug = tag_in.slug or slugify(tag_in.name)
        if not slug:
            raise BlogError("Could not derive a slug from the name; please provide one")
        return self.create(db, obj_in={"name": tag_in.name.strip(), "slug": slug})

    def delete_tag(self, db: Session, *, tag_id: int) -> Tag:
        """Delete a tag that no post uses."""
        tag = self.get_or_raise(db, tag_id)
        in_use = db.scalar(select(func.count()).select_from(PostTag).where(PostTag.tag_id == tag_id)) or 0
        if in_use:
            raise ResourceInUseError(f"Cannot delete tag because it's used by {in_use} posts")
        db.delete(tag)
        self.commit(db)
        logger.info(f"[TAG] Deleted tag id={tag_id}")
        return tag


# Singleton instance
crud_tag = CRUDTag(Tag)
