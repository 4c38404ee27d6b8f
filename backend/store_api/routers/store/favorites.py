"""
The current user's favorite products.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from store_api.routers._common import get_locale, get_user_id, ok
from store_api.services.domain import FavoriteService


router = APIRouter(tags=["favorites"])


@router.get("/favorites")
def list_favorites(
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> dict:
    """Favorite products, most recently added first."""
    return ok(FavoriteService(db).list_for_user(get_user_id(user), locale))
