"""Pydantic schemas for Post."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from blogcms.models.post import PostStatus
from blogcms.schemas.author import AuthorResponse
from blogcms.schemas.category import CategoryResponse, SLUG_ERROR
from blogcms.schemas.tag import TagResponse
from blogcms.utils.text import is_valid_slug


def _check_slug(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip().lower()
    if not is_valid_slug(v):
        raise ValueError(SLUG_ERROR)
    return v


class PostBase(BaseModel):
    """Base schema for Post."""
    title: str = Field(..., min_length=1, max_length=255, description="Post title")
    content: str = Field(..., min_length=1, description="Post body (markdown)")
    excerpt: Optional[str] = Field(None, description="Short summary; derived from content when omitted")
    cover_image: Optional[str] = Field(None, max_length=500)
    featured: bool = False
    status: PostStatus = PostStatus.DRAFT
    date: Optional[datetime] = Field(None, description="Publication date; defaults to now")
    author_id: int = Field(..., gt=0)
    category_id: int = Field(..., gt=0)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v


class PostCreate(PostBase):
    """Schema for creating a new post."""
    slug: Optional[str] = Field(None, max_length=255, description="Derived from title when omitted")
    tag_ids: List[int] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        return _check_slug(v)


class PostUpdate(BaseModel):
    """Schema for updating a post. ``tag_ids=None`` leaves tags untouched."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    cover_image: Optional[str] = Field(None, max_length=500)
    featured: Optional[bool] = None
    status: Optional[PostStatus] = None
    date: Optional[datetime] = None
    author_id: Optional[int] = Field(None, gt=0)
    category_id: Optional[int] = Field(None, gt=0)
    tag_ids: Optional[List[int]] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        return _check_slug(v)


class PostTagsUpdate(BaseModel):
    """Replace the tag set of a post."""
    tag_ids: List[int] = Field(default_factory=list)


class PostResponse(BaseModel):
    """Schema for a bare Post row."""
    id: int
    title: str
    slug: str
    excerpt: str
    content: str
    cover_image: Optional[str] = None
    date: datetime
    featured: bool
    status: PostStatus
    views: int
    author_id: int
    category_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostWithRelations(PostResponse):
    """Post with its author, category and tags assembled."""
    author: Optional[AuthorResponse] = None
    category: Optional[CategoryResponse] = None
    tags: List[TagResponse] = []
    read_time: int = 1


class PostAdminItem(PostResponse):
    """Row of the admin post table."""
    author: Optional[AuthorResponse] = None
    category: Optional[CategoryResponse] = None
    tag_count: int = 0
    comment_count: int = 0


class PostListResponse(BaseModel):
    """Response for listing posts."""
    posts: List[PostWithRelations]
    total: int
    has_more: bool = Field(..., description="Whether there are more posts to load")


class PostAdminListResponse(BaseModel):
    posts: List[PostAdminItem]
    total: int
