"""User management endpoints (admin only)."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from blogcms.api.deps import get_db, require_admin
from blogcms.crud import crud_user
from blogcms.models.user import User
from blogcms.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

admin_router = APIRouter(
    prefix="/admin/users",
    tags=["Admin Users"],
)


@admin_router.get(
    "",
    response_model=List[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="List all users",
)
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> List[User]:
    return crud_user.get_multi(db, skip=skip, limit=limit)


@admin_router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by ID",
)
def get_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> User:
    return crud_user.get_or_raise(db, user_id)


@admin_router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
def create_user(
    user_in: UserCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> User:
    """
    Create a user account.

    Raises:
        UniqueConstraintViolation: 400 if the email is already registered
    """
    return crud_user.create_user(db, user_in=user_in)


@admin_router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> User:
    return crud_user.update_user(db, user_id=user_id, user_in=user_in)


@admin_router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete user",
)
def delete_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account",
        )
    crud_user.delete(db, id=user_id)
    logger.info(f"[USER] Deleted user id={user_id} by admin id={current_user.id}")
    return {"success": True, "message": "User deleted"}


__all__ = ["admin_router"]
