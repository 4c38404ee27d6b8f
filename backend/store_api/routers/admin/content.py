"""
Back-office content endpoints: home page sections and interface translations.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from store_api.routers._common import get_user_email, get_user_id, ok, require_admin
from store_api.schemas import HomeContentUpdate, TranslationUpsert
from store_api.services.domain import HomePageService, TranslationService


router = APIRouter(tags=["admin-content"])


@router.get("/home-content")
def get_home_content(
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Stored home page sections; created empty on first read."""
    return ok(HomePageService(db).get())


@router.post("/home-content")
def update_home_content(
    body: HomeContentUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """
    Replace the given sections.

    Hero banner texts and button URLs are required when the banner is
    sent; the features section holds at most 6 items.
    """
    content = HomePageService(db).update(body, get_user_id(user), get_user_email(user))
    return ok(content, message="Home content updated successfully")


@router.get("/translations")
def list_translations(
    category: str = Query(default="auth", min_length=1, max_length=50),
    db: Session = Depends(get_db),
) -> dict:
    """Translations of one category as {key: {locale: text}}."""
    return ok(TranslationService(db).by_category(category))


@router.post("/translations")
def save_translation(
    body: TranslationUpsert,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    translation = TranslationService(db).upsert(body, get_user_id(user), get_user_email(user))
    return ok(translation, message="Translation saved successfully")
