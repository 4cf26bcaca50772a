"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .author import crud_author
from .category import crud_category
from .tag import crud_tag
from .post import crud_post
from .comment import crud_comment
from .site_setting import crud_site_setting


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_author",
    "crud_category",
    "crud_tag",
    "crud_post",
    "crud_comment",
    "crud_site_setting",
]
