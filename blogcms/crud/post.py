"""CRUD operations for Post, including tag-set synchronization."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from blogcms.config import settings
from blogcms.core.exceptions import BlogError, ForeignKeyViolation, NotFoundError
from blogcms.core.post_status import ensure_transition
from blogcms.crud.base import CRUDBase
from blogcms.crud.relations import PostRelationLoader
from blogcms.models.author import Author
from blogcms.models.category import Category
from blogcms.models.comment import Comment
from blogcms.models.post import Post, PostStatus, VISIBLE_STATUSES
from blogcms.models.post_tag import PostTag
from blogcms.models.tag import Tag
from blogcms.schemas.author import AuthorResponse
from blogcms.schemas.category import CategoryResponse
from blogcms.schemas.post import PostAdminItem, PostCreate, PostUpdate, PostWithRelations
from blogcms.utils.text import create_excerpt, slugify

logger = logging.getLogger(__name__)

# Columns an update may explicitly clear; explicit nulls for the rest are ignored
NULLABLE_FIELDS = {"cover_image"}


def _dedupe(ids: Iterable[int]) -> List[int]:
    """Drop duplicate ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    entity_name = "Post"
    unique_message = "A post with this slug already exists"
    unique_messages = {
        "post_tags": "The tag set of this post was changed by another request; please retry",
    }

    def __init__(self, model=Post, *, enforce_status_transitions: bool = True):
        super().__init__(model)
        self.enforce_status_transitions = enforce_status_transitions

    # ----- Assembly -----
    def get_with_relations(self, db: Session, *, post_id: int) -> PostWithRelations:
        """Post by id with author, category and tags."""
        post = self.get_or_raise(db, post_id)
        return PostRelationLoader(db).assemble([post])[0]

    def get_by_slug_with_relations(
        self,
        db: Session,
        *,
        slug: str,
        visible_only: bool = False
    ) -> PostWithRelations:
        """Post by slug with author, category and tags."""
        stmt = select(Post).where(Post.slug == slug)
        if visible_only:
            stmt = stmt.where(Post.status.in_(VISIBLE_STATUSES))
        post = db.scalars(stmt).first()
        if post is None:
            raise NotFoundError(self.entity_name, slug)
        return PostRelationLoader(db).assemble([post])[0]

    def _filtered(
        self,
        stmt: Select,
        *,
        statuses: Optional[Sequence[PostStatus]] = None,
        category_slug: Optional[str] = None,
        tag_slug: Optional[str] = None,
        author_id: Optional[int] = None,
        featured: Optional[bool] = None,
    ) -> Select:
        if statuses:
            stmt = stmt.where(Post.status.in_(statuses))
        if category_slug is not None:
            stmt = stmt.where(
                Post.category_id.in_(select(Category.id).where(Category.slug == category_slug))
            )
        if tag_slug is not None:
            stmt = stmt.where(
                Post.id.in_(
                    select(PostTag.post_id)
                    .join(Tag, Tag.id == PostTag.tag_id)
                    .where(Tag.slug == tag_slug)
                )
            )
        if author_id is not None:
            stmt = stmt.where(Post.author_id == author_id)
        if featured is not None:
            stmt = stmt.where(Post.featured == featured)
        return stmt

    def find_all(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
        **filters: Any
    ) -> List[PostWithRelations]:
        """Posts newest first, with relations loaded in batch.

        Filters: ``statuses``, ``category_slug``, ``tag_slug``, ``author_id``, ``featured``.
        """
        stmt = self._filtered(select(Post), **filters)
        stmt = stmt.order_by(desc(Post.date), desc(Post.id)).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        posts = db.scalars(stmt).all()
        return PostRelationLoader(db).assemble(posts)

    def count_filtered(self, db: Session, **filters: Any) -> int:
        stmt = self._filtered(select(func.count(Post.id)), **filters)
        return db.scalar(stmt) or 0

    def get_recent(self, db: Session, *, limit: int = 5) -> List[PostWithRelations]:
        return self.find_all(db, limit=limit, statuses=VISIBLE_STATUSES)

    def search(self, db: Session, *, query: str, limit: int = 50) -> List[PostWithRelations]:
        """Case-insensitive substring search over title, excerpt and content."""
        term = query.strip().lower()
        if not term:
            return []
        stmt = (
            select(Post)
            .where(Post.status.in_(VISIBLE_STATUSES))
            .where(or_(
                func.lower(Post.title).contains(term, autoescape=True),
                func.lower(Post.excerpt).contains(term, autoescape=True),
                func.lower(Post.content).contains(term, autoescape=True),
            ))
            .order_by(desc(Post.date), desc(Post.id))
            .limit(limit)
        )
        posts = db.scalars(stmt).all()
        return PostRelationLoader(db).assemble(posts)

    def find_all_for_admin(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> List[PostAdminItem]:
        """All posts with author, category, tag count and comment count."""
        stmt = select(Post).order_by(desc(Post.date), desc(Post.id)).offset(skip).limit(limit)
        posts = db.scalars(stmt).all()
        if not posts:
            return []

        post_ids = [post.id for post in posts]
        loader = PostRelationLoader(db)
        authors = loader.load_authors(post.author_id for post in posts)
        categories = loader.load_categories(post.category_id for post in posts)
        tag_counts = dict(db.execute(
            select(PostTag.post_id, func.count())
            .where(PostTag.post_id.in_(post_ids))
            .group_by(PostTag.post_id)
        ).all())
        comment_counts = dict(db.execute(
            select(Comment.post_id, func.count())
            .where(Comment.post_id.in_(post_ids))
            .group_by(Comment.post_id)
        ).all())

        items = []
        for post in posts:
            author = authors.get(post.author_id)
            category = categories.get(post.category_id)
            items.append(
                PostAdminItem.model_validate(post).model_copy(update={
                    "author": AuthorResponse.model_validate(author) if author else None,
                    "category": CategoryResponse.model_validate(category) if category else None,
                    "tag_count": tag_counts.get(post.id, 0),
                    "comment_count": comment_counts.get(post.id, 0),
                })
            )
        return items

    # ----- Reference checks -----
    def _ensure_reference(self, db: Session, model, ref_id: int, field: str) -> None:
        if db.get(model, ref_id) is None:
            raise ForeignKeyViolation(f"Invalid reference: {field}={ref_id} does not exist")

    def _ensure_tags_exist(self, db: Session, tag_ids: List[int]) -> None:
        if not tag_ids:
            return
        found = set(db.scalars(select(Tag.id).where(Tag.id.in_(tag_ids))).all())
        missing = [tag_id for tag_id in tag_ids if tag_id not in found]
        if missing:
            raise ForeignKeyViolation(f"Invalid reference: tag_ids {missing} do not exist")

    # ----- Tag synchronization -----
    def _lock_post(self, db: Session, post_id: int) -> Post:
        """Load a post with ``SELECT ... FOR UPDATE`` so tag writers serialize on its row."""
        stmt = (
            select(Post)
            .where(Post.id == post_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        post = db.scalars(stmt).first()
        if post is None:
            raise NotFoundError(self.entity_name, post_id)
        return post

    def _apply_tag_diff(self, db: Session, post_id: int, tag_ids: Iterable[int]) -> List[int]:
        """Make the junction rows of ``post_id`` equal ``set(tag_ids)``.

        Removal matches every row outside the desired set at execution time,
        and additions are computed from a read taken after that delete, so a
        sync that started from a stale view still ends with exactly the
        requested tags. Retained rows keep their ``created_at``. Does not commit.
        """
        desired = _dedupe(tag_ids)
        self._ensure_tags_exist(db, desired)

        stmt = delete(PostTag).where(PostTag.post_id == post_id)
        if desired:
            stmt = stmt.where(PostTag.tag_id.not_in(desired))
        removed = db.execute(stmt).rowcount or 0

        existing = set(db.scalars(select(PostTag.tag_id).where(PostTag.post_id == post_id)).all())
        to_add = [tag_id for tag_id in desired if tag_id not in existing]
        for tag_id in to_add:
            db.add(PostTag(post_id=post_id, tag_id=tag_id))
        db.flush()

        logger.info(f"[POST] Tags synced for post_id={post_id}: +{len(to_add)} -{removed}")
        return sorted(desired)

    def sync_tags(self, db: Session, *, post_id: int, tag_ids: Iterable[int]) -> List[int]:
        """Atomically replace the tag set of a post. Returns the final tag ids."""
        with self.atomic(db):
            self._lock_post(db, post_id)
            result = self._apply_tag_diff(db, post_id, tag_ids)
        self.commit(db)
        return result

    # ----- Create / Update / Delete -----
    def create_post(self, db: Session, *, post_in: PostCreate) -> PostWithRelations:
        """Create a post and its tag rows in one transaction."""
        data: Dict[str, Any] = post_in.model_dump(exclude={"tag_ids"})
        data["slug"] = data.get("slug") or slugify(data["title"])
        if not data["slug"]:
            raise BlogError("Could not derive a slug from the title; please provide one")
        if not data.get("excerpt"):
            data["excerpt"] = create_excerpt(data["content"])
        if data.get("date") is None:
            data.pop("date", None)

        with self.atomic(db):
            self._ensure_reference(db, Author, data["author_id"], "author_id")
            self._ensure_reference(db, Category, data["category_id"], "category_id")

            post = Post(**data)
            db.add(post)
            db.flush()
            self._apply_tag_diff(db, post.id, post_in.tag_ids)
        self.commit(db, post)

        logger.info(f"[POST] Created post id={post.id} slug={post.slug}")
        return self.get_with_relations(db, post_id=post.id)

    def update_post(
        self,
        db: Session,
        *,
        post_id: int,
        post_in: PostUpdate
    ) -> PostWithRelations:
        """Update fields, status and (optionally) tags of a post in one transaction."""
        update_data = post_in.model_dump(exclude_unset=True)
        tag_ids = update_data.pop("tag_ids", None)

        with self.atomic(db):
            post = self._lock_post(db, post_id)
            new_status = update_data.get("status")
            if new_status is not None and self.enforce_status_transitions:
                ensure_transition(PostStatus(post.status), new_status)
            if update_data.get("author_id") is not None:
                self._ensure_reference(db, Author, update_data["author_id"], "author_id")
            if update_data.get("category_id") is not None:
                self._ensure_reference(db, Category, update_data["category_id"], "category_id")

            for field, value in update_data.items():
                if value is None and field not in NULLABLE_FIELDS:
                    continue
                setattr(post, field, value)
            db.add(post)
            db.flush()

            if tag_ids is not None:
                self._apply_tag_diff(db, post.id, tag_ids)
        self.commit(db, post)

        logger.info(f"[POST] Updated post id={post.id}")
        return self.get_with_relations(db, post_id=post.id)

    def delete_post(self, db: Session, *, post_id: int) -> None:
        """Delete a post together with its junction rows and comments."""
        post = self.get_or_raise(db, post_id)
        with self.atomic(db):
            db.execute(delete(PostTag).where(PostTag.post_id == post_id))
            db.execute(delete(Comment).where(Comment.post_id == post_id))
            db.delete(post)
        self.commit(db)
        logger.info(f"[POST] Deleted post id={post_id}")

    def increment_views(self, db: Session, *, post_id: int) -> int:
        """Atomically add one view; returns the new count."""
        result = db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(views=Post.views + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
            raise NotFoundError(self.entity_name, post_id)
        self.commit(db)
        return db.scalar(select(Post.views).where(Post.id == post_id)) or 0


# Singleton instance
crud_post = CRUDPost(Post, enforce_status_transitions=settings.ENFORCE_STATUS_TRANSITIONS)
