import json
from typing import Dict, List

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class SiteDefaults(BaseModel):
    """Fallback values for site settings that have no stored row."""

    # General
    site_title: str = "Blog Template"
    site_description: str = "A Python Blog Template"
    site_logo: str = "/logo.png"
    site_favicon: str = "/favicon.ico"

    # SEO
    meta_title: str = "Blog Template | A Python Blog"
    meta_description: str = "A powerful, feature-rich blog backend built with FastAPI and SQLAlchemy"
    meta_keywords: str = "blog, fastapi, sqlalchemy, python"
    og_image: str = "/og-image.jpg"
    twitter_handle: str = "@yourtwitterhandle"

    # Contact
    contact_email: str = "contact@example.com"

    # Social media
    social_twitter: str = "https://twitter.com/"
    social_facebook: str = "https://facebook.com/"
    social_instagram: str = "https://instagram.com/"
    social_linkedin: str = "https://linkedin.com/"
    social_github: str = "https://github.com/"

    # Analytics
    google_analytics_id: str = ""

    # Footer
    footer_text: str = "© 2025 Blog Template. All rights reserved."
    footer_links: str = json.dumps([
        {"name": "Home", "url": "/"},
        {"name": "About", "url": "/about"},
        {"name": "Contact", "url": "/contact"},
        {"name": "Privacy Policy", "url": "/privacy"},
    ])

    def as_dict(self) -> Dict[str, str]:
        return self.model_dump()


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str

    # API
    API_TITLE: str = "Blog CMS API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Security
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Content
    ENFORCE_STATUS_TRANSITIONS: bool = True
    INIT_SETTINGS_ON_STARTUP: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
