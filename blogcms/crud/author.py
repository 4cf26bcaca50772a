"""CRUD operations for Author."""

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blogcms.core.exceptions import ResourceInUseError
from blogcms.crud.base import CRUDBase
from blogcms.models.author import Author
from blogcms.models.post import Post, VISIBLE_STATUSES
from blogcms.schemas.author import AuthorCreate, AuthorUpdate, AuthorWithPostCount

logger = logging.getLogger(__name__)


class CRUDAuthor(CRUDBase[Author, AuthorCreate, AuthorUpdate]):
    """CRUD operations for Author."""

    entity_name = "Author"
    fk_message = "Cannot delete author while draft or unpublished posts still reference them"

    def get_all_with_post_count(self, db: Session) -> List[AuthorWithPostCount]:
        """All authors ordered by name, each with its number of posts."""
        authors = db.scalars(select(Author).order_by(Author.name, Author.id)).all()
        counts = dict(db.execute(
            select(Post.author_id, func.count(Post.id)).group_by(Post.author_id)
        ).all())
        return [
            AuthorWithPostCount.model_validate(author).model_copy(
                update={"post_count": counts.get(author.id, 0)}
            )
            for author in authors
        ]

    def delete_author(self, db: Session, *, author_id: int) -> Author:
        """Delete an author that owns no publicly visible (published or corrected) posts."""
        author = self.get_or_raise(db, author_id)
        published = db.scalar(
            select(func.count(Post.id)).where(
                Post.author_id == author_id,
                Post.status.in_(VISIBLE_STATUSES),
            )
        ) or 0
        if published:
            raise ResourceInUseError(
                f"Cannot delete author because they have {published} published posts"
            )
        db.delete(author)
        self.commit(db)
        logger.info(f"[AUTHOR] Deleted author id={author_id}")
        return author


# Singleton instance
crud_author = CRUDAuthor(Author)
