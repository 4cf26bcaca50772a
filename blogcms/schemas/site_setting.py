"""Pydantic schemas for site settings."""

from typing import Dict
from pydantic import BaseModel, Field


class SiteSettingsResponse(BaseModel):
    settings: Dict[str, str]


class SiteSettingsUpdateResponse(BaseModel):
    success: bool = True
    message: str
    settings: Dict[str, str]


class SiteSettingsUpdate(BaseModel):
    settings: Dict[str, str] = Field(..., description="Key/value pairs to upsert")
