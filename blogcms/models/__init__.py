"""
SQLAlchemy Models for the blog
"""

from ..database import Base
from .user import User
from .author import Author
from .category import Category
from .tag import Tag
from .post import Post, PostStatus, VISIBLE_STATUSES
from .post_tag import PostTag
from .comment import Comment
from .site_setting import SiteSetting

# Export all models
__all__ = [
    "Base",
    "User",
    "Author",
    "Category",
    "Tag",
    "Post",
    "PostStatus",
    "VISIBLE_STATUSES",
    "PostTag",
    "Comment",
    "SiteSetting",
]
