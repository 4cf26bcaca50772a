"""Domain exceptions for the blog CMS.

CRUD methods raise these; ``main.py`` maps them to HTTP responses using
``status_code`` and ``detail``.
"""

from typing import Mapping, Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError


class BlogError(Exception):
    """Base class for errors the API reports to the client."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(BlogError):
    """Requested entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"

    def __init__(self, entity: str = "Resource", identifier: object = None):
        detail = f"{entity} not found" if identifier is None else f"{entity} '{identifier}' not found"
        super().__init__(detail)


class UniqueConstraintViolation(BlogError):
    """Duplicate value in a unique column (slug, email, setting key)."""

    default_detail = "A record with this value already exists"


class ForeignKeyViolation(BlogError):
    """Reference to an author, category or tag that does not exist."""

    default_detail = "Invalid reference: author, category or tag does not exist"


class ResourceInUseError(BlogError):
    """Delete refused because other rows still depend on the entity."""

    default_detail = "Resource is still in use"


class InvalidStatusTransitionError(BlogError):
    """Post status change not allowed by the transition table."""

    default_detail = "Invalid status transition"


class StorageError(BlogError):
    """Any other database failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal storage error"


# SQLSTATE codes reported by PostgreSQL drivers
UNIQUE_VIOLATION_CODE = "23505"
FOREIGN_KEY_VIOLATION_CODE = "23503"


def _sqlstate(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    # psycopg2 exposes ``pgcode``, psycopg 3 exposes ``sqlstate``
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _constraint_name(exc: IntegrityError) -> str:
    diag = getattr(exc.orig, "diag", None)
    return (getattr(diag, "constraint_name", None) or "").lower()


def translate_integrity_error(
    exc: IntegrityError,
    unique_message: Optional[str] = None,
    fk_message: Optional[str] = None,
    *,
    unique_messages: Optional[Mapping[str, str]] = None,
) -> BlogError:
    """Map a constraint violation to a domain exception.

    ``unique_messages`` maps a table or constraint name fragment to a more
    specific message for unique violations that mention it.

    Returns ``StorageError`` when the violation is neither a unique nor a
    foreign-key constraint. Callers raise the result ``from exc``.
    """
    code = _sqlstate(exc)
    message = str(exc.orig).lower()

    if code == UNIQUE_VIOLATION_CODE or "unique constraint" in message or "duplicate key" in message:
        searched = f"{message} {_constraint_name(exc)}"
        for fragment, detail in (unique_messages or {}).items():
            if fragment.lower() in searched:
                return UniqueConstraintViolation(detail)
        return UniqueConstraintViolation(unique_message)
    if code == FOREIGN_KEY_VIOLATION_CODE or "foreign key constraint" in message:
        return ForeignKeyViolation(fk_message)
    return StorageError()


__all__ = [
    "BlogError",
    "NotFoundError",
    "UniqueConstraintViolation",
    "ForeignKeyViolation",
    "ResourceInUseError",
    "InvalidStatusTransitionError",
    "StorageError",
    "translate_integrity_error",
]
