"""FastAPI dependency injection functions for authentication and database access."""

import logging
from typing import Callable, Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from blogcms.core.security import decode_token
from blogcms.crud import crud_user
from blogcms.database import SessionLocal
from blogcms.models.user import User

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
    except HTTPException:
        logger.warning("[AUTH] Token decode failed")
        raise credentials_exception

    email = payload.get("sub")
    if email is None:
        logger.warning("[AUTH] Subject missing in token payload")
        raise credentials_exception

    user = crud_user.get_by_email(db, email)
    if user is None:
        logger.warning(f"[AUTH] User not found for email: {email}")
        raise credentials_exception

    return user


def require_role(*allowed_roles: str) -> Callable:
    """
    Factory function to create role-based access control dependency.

    Example:
        @router.get("/admin/users")
        def list_users(current_user: User = Depends(require_role("admin"))):
            ...
    """
    def role_checker(
        current_user: User = Depends(get_current_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not enough permissions. Required role(s): {', '.join(allowed_roles)}"
            )
        return current_user

    return role_checker


require_admin = require_role("admin")


__all__ = [
    "oauth2_scheme",
    "get_db",
    "get_current_user",
    "require_role",
    "require_admin",
]
