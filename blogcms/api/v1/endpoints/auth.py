"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from blogcms.api.deps import get_current_user, get_db
from blogcms.core.security import create_access_token
from blogcms.crud import crud_user
from blogcms.models.user import User
from blogcms.schemas.user import Token, UserLogin, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


def _issue_token(user: User) -> Token:
    access_token = create_access_token(data={"sub": user.email, "role": user.role})
    return Token(access_token=access_token, user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=Token,
    status_code=status.HTTP_200_OK,
    summary="Login (OAuth2 form)",
)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """
    OAuth2 compatible login; the `username` field carries the email.

    Raises:
        HTTPException: 401 if credentials invalid
    """
    user = crud_user.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        logger.info(f"[AUTH] Failed login for {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token(user)


@router.post(
    "/login/json",
    response_model=Token,
    status_code=status.HTTP_200_OK,
    summary="Login (JSON body)",
)
def login_json(
    credentials: UserLogin,
    db: Session = Depends(get_db),
) -> Token:
    user = crud_user.authenticate(db, email=credentials.email, password=credentials.password)
    if not user:
        logger.info(f"[AUTH] Failed login for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token(user)


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user info",
)
def get_me(
    current_user: User = Depends(get_current_user),
) -> User:
    return current_user


__all__ = ["router"]
