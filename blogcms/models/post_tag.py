"""Junction table between posts and tags."""

from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from ..database import Base


class PostTag(Base):
    """One row per (post, tag) pair. Owned by the post side."""

    __tablename__ = "post_tags"

    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True
    )
    tag_id = Column(
        Integer,
        ForeignKey("tags.id"),
        primary_key=True
    )

    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        # Reverse lookup: posts by tag
        Index("idx_post_tag_tag", "tag_id", "post_id"),
    )
