"""Pydantic schemas for Category."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from blogcms.utils.text import is_valid_slug

SLUG_ERROR = "Slug must use lowercase letters, numbers and hyphens only"


class CategoryBase(BaseModel):
    """Base schema for Category."""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")


class CategoryCreate(CategoryBase):
    """Schema for creating a category. Slug is derived from name when omitted."""
    slug: Optional[str] = Field(None, max_length=100)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_slug(v):
            raise ValueError(SLUG_ERROR)
        return v


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_slug(v):
            raise ValueError(SLUG_ERROR)
        return v


class CategoryResponse(CategoryBase):
    """Schema for Category response."""
    id: int
    slug: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryWithPostCount(CategoryResponse):
    post_count: int = 0
