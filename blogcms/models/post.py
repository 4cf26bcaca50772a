"""Post model for blog articles."""

from enum import Enum
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index, Boolean, Enum as SQLEnum
from sqlalchemy.sql import func
from ..database import Base


class PostStatus(str, Enum):
    """Editorial status of a post."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    UNPUBLISHED = "UNPUBLISHED"
    CORRECTED = "CORRECTED"


# Statuses shown on the public site
VISIBLE_STATUSES = (PostStatus.PUBLISHED, PostStatus.CORRECTED)


class Post(Base):
    """Blog post. Author, category and tags are assembled by the CRUD layer."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)

    # Content
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    excerpt = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False)
    cover_image = Column(String(500), nullable=True)

    # Publishing
    date = Column(TIMESTAMP, nullable=False, server_default=func.now(), index=True)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    status = Column(
        SQLEnum(PostStatus, name="post_status"),
        nullable=False,
        default=PostStatus.DRAFT,
        index=True
    )
    views = Column(Integer, nullable=False, default=0)

    # Foreign Keys
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_post_status_date", "status", "date"),
        Index("idx_post_category_date", "category_id", "date"),
    )
