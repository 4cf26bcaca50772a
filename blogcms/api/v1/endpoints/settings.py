"""Site settings endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blogcms.api.deps import get_db, require_admin
from blogcms.crud import crud_site_setting
from blogcms.schemas.site_setting import (
    SiteSettingsResponse,
    SiteSettingsUpdate,
    SiteSettingsUpdateResponse,
)

router = APIRouter(
    prefix="/settings",
    tags=["Settings"],
)

admin_router = APIRouter(
    prefix="/admin/settings",
    tags=["Admin Settings"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "",
    response_model=SiteSettingsResponse,
    summary="Get site settings",
    description="""
    Without `keys`, returns every setting. With `keys`, returns exactly those
    keys; unknown keys fall back to their default or an empty string.
    """,
)
def get_settings(
    keys: Optional[List[str]] = Query(None, description="Keys to fetch"),
    db: Session = Depends(get_db),
) -> SiteSettingsResponse:
    if keys:
        return SiteSettingsResponse(settings=crud_site_setting.get_by_keys(db, keys))
    return SiteSettingsResponse(settings=crud_site_setting.get_all(db))


@admin_router.get("", response_model=SiteSettingsResponse, summary="Get all settings (admin)")
def admin_get_settings(db: Session = Depends(get_db)) -> SiteSettingsResponse:
    return SiteSettingsResponse(settings=crud_site_setting.get_all(db))


@admin_router.put(
    "",
    response_model=SiteSettingsUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Update settings",
)
def update_settings(
    settings_in: SiteSettingsUpdate,
    db: Session = Depends(get_db),
) -> SiteSettingsUpdateResponse:
    updated = crud_site_setting.update_batch(db, settings_in.settings)
    return SiteSettingsUpdateResponse(
        message=f"Updated {len(updated)} settings",
        settings=updated,
    )


@admin_router.post(
    "/reset",
    response_model=SiteSettingsUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Reset settings to defaults",
)
def reset_settings(db: Session = Depends(get_db)) -> SiteSettingsUpdateResponse:
    settings = crud_site_setting.reset_to_defaults(db)
    return SiteSettingsUpdateResponse(
        message="Settings reset to defaults",
        settings=settings,
    )
