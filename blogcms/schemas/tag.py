"""Pydantic schemas for Tag."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from blogcms.schemas.category import SLUG_ERROR
from blogcms.utils.text import is_valid_slug


class TagBase(BaseModel):
    """Base schema for Tag."""
    name: str = Field(..., min_length=1, max_length=100, description="Tag name")


class TagCreate(TagBase):
    """Schema for creating a tag. Slug is derived from name when omitted."""
    slug: Optional[str] = Field(None, max_length=100)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_slug(v):
            raise ValueError(SLUG_ERROR)
        return v


class TagUpdate(BaseModel):
    """Schema for updating a tag."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_slug(v):
            raise ValueError(SLUG_ERROR)
        return v


class TagResponse(TagBase):
    """Schema for Tag response."""
    id: int
    slug: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TagWithPostCount(TagResponse):
    post_count: int = 0
