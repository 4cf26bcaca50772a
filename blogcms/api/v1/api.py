"""API v1 router aggregator."""

from fastapi import APIRouter

from blogcms.api.v1.endpoints import (
    auth,
    authors,
    categories,
    comments,
    posts,
    settings,
    tags,
    users,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)

# Public site
api_router.include_router(posts.router)
api_router.include_router(categories.router)
api_router.include_router(tags.router)
api_router.include_router(authors.router)
api_router.include_router(settings.router)

# Admin dashboard
api_router.include_router(posts.admin_router)
api_router.include_router(authors.admin_router)
api_router.include_router(categories.admin_router)
api_router.include_router(tags.admin_router)
api_router.include_router(users.admin_router)
api_router.include_router(comments.admin_router)
api_router.include_router(settings.admin_router)

__all__ = ["api_router"]
