"""
Admin API router - /api/admin/*

- settings: site settings and admin preferences (singletons)
- content: home page sections and interface translations
"""

from fastapi import APIRouter

from .content import router as content_router
from .settings import router as settings_router


router = APIRouter(prefix="/api/admin")

router.include_router(settings_router)
router.include_router(content_router)

__all__ = ["router"]
