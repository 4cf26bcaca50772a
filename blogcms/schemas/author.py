"""Pydantic schemas for Author."""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class AuthorBase(BaseModel):
    """Base schema for Author."""
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    avatar: Optional[str] = Field(None, max_length=500, description="Avatar image URL")
    bio: Optional[str] = None
    social: Optional[Dict[str, Any]] = Field(None, description="Social links, e.g. {'twitter': '...'}")


class AuthorCreate(AuthorBase):
    """Schema for creating a new author."""
    pass


class AuthorUpdate(BaseModel):
    """Schema for updating an author."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    avatar: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = None
    social: Optional[Dict[str, Any]] = None


class AuthorResponse(AuthorBase):
    """Schema for Author response."""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AuthorWithPostCount(AuthorResponse):
    post_count: int = 0
