"""Pydantic schemas for Comment."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    author_name: str = Field(..., min_length=1, max_length=255)
    author_email: str = Field(..., max_length=255)

    @field_validator("author_email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("Invalid email address")
        return v


class CommentUpdate(BaseModel):
    content: Optional[str] = Field(None, min_length=1, max_length=5000)
    approved: Optional[bool] = None


class CommentResponse(BaseModel):
    id: int
    post_id: int
    content: str
    author_name: str
    approved: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentAdminResponse(CommentResponse):
    author_email: str


class CommentListResponse(BaseModel):
    comments: List[CommentResponse]
    total: int
