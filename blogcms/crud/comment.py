"""CRUD operations for Comment."""

from typing import List, Optional
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from blogcms.core.exceptions import NotFoundError
from blogcms.crud.base import CRUDBase
from blogcms.models.comment import Comment
from blogcms.models.post import Post
from blogcms.schemas.comment import CommentCreate, CommentUpdate


class CRUDComment(CRUDBase[Comment, CommentCreate, CommentUpdate]):
    """CRUD operations for Comment."""

    entity_name = "Comment"

    def create_comment(self, db: Session, *, post_id: int, comment_in: CommentCreate) -> Comment:
        """New comments start unapproved."""
        if db.get(Post, post_id) is None:
            raise NotFoundError("Post", post_id)
        data = comment_in.model_dump()
        data.update(post_id=post_id, approved=False)
        return self.create(db, obj_in=data)

    def get_by_post(
        self,
        db: Session,
        *,
        post_id: int,
        approved_only: bool = True
    ) -> List[Comment]:
        """Comments of a post, newest first."""
        stmt = select(Comment).where(Comment.post_id == post_id)
        if approved_only:
            stmt = stmt.where(Comment.approved == True)  # noqa: E712
        stmt = stmt.order_by(desc(Comment.created_at), desc(Comment.id))
        return list(db.scalars(stmt).all())

    def get_all(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        approved: Optional[bool] = None
    ) -> List[Comment]:
        stmt = select(Comment)
        if approved is not None:
            stmt = stmt.where(Comment.approved == approved)
        stmt = stmt.order_by(desc(Comment.created_at), desc(Comment.id)).offset(skip).limit(limit)
        return list(db.scalars(stmt).all())

    def approve(self, db: Session, *, comment_id: int) -> Comment:
        comment = self.get_or_raise(db, comment_id)
        return self.update(db, db_obj=comment, obj_in={"approved": True})


# Singleton instance
crud_comment = CRUDComment(Comment)
