"""Core module exports: security helpers, domain errors and status rules."""

from .exceptions import (
    BlogError,
    ForeignKeyViolation,
    InvalidStatusTransitionError,
    NotFoundError,
    ResourceInUseError,
    StorageError,
    UniqueConstraintViolation,
)
from .post_status import can_transition, ensure_transition
from .security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)

__all__ = [
    "BlogError",
    "ForeignKeyViolation",
    "InvalidStatusTransitionError",
    "NotFoundError",
    "ResourceInUseError",
    "StorageError",
    "UniqueConstraintViolation",
    "can_transition",
    "ensure_transition",
    "create_access_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
]
