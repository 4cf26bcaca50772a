"""Reader comment on a post."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Boolean, Index
from sqlalchemy.sql import func
from ..database import Base


class Comment(Base):
    """Comments are hidden from the public site until approved."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)

    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    content = Column(Text, nullable=False)
    author_name = Column(String(255), nullable=False)
    author_email = Column(String(255), nullable=False)
    approved = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_comment_post_created", "post_id", "created_at"),
    )
