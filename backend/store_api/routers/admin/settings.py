"""
Site settings and admin preferences endpoints (ADMIN only).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from store_api.routers._common import get_user_email, get_user_id, ok, require_admin
from store_api.schemas import AdminPreferencesUpdate, SiteSettingsUpdate
from store_api.services.domain import AdminPreferencesService, SiteSettingsService


router = APIRouter(tags=["admin-settings"])


@router.get("/settings")
def get_site_settings(
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Site settings; created with defaults on first read."""
    return ok(SiteSettingsService(db).get())


@router.put("/settings")
def update_site_settings(
    body: SiteSettingsUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """
    Update title and language settings.

    Turning multilingual off collapses supportedLanguages to the
    default language.
    """
    settings = SiteSettingsService(db).update(
        body.model_dump(exclude_unset=True), get_user_id(user), get_user_email(user)
    )
    return ok(settings, message="Settings updated successfully")


@router.get("/preferences")
def get_admin_preferences(
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    return ok(AdminPreferencesService(db).get())


@router.put("/preferences")
def update_admin_preferences(
    body: AdminPreferencesUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    preferences = AdminPreferencesService(db).update(
        body.model_dump(exclude_unset=True), get_user_id(user), get_user_email(user)
    )
    return ok(preferences, message="Preferences updated successfully")
