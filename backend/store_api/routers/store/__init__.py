"""
Store API router - /api/store/*

- products: listing, CRUD, bulk update, favorite and reviews
- categories: CRUD and tree
- ingredients, extras: CRUD
- favorites: current user's favorites
"""

from fastapi import APIRouter

from .products import router as products_router
from .categories import router as categories_router
from .ingredients import router as ingredients_router
from .extras import router as extras_router
from .favorites import router as favorites_router


router = APIRouter(prefix="/api/store")

router.include_router(products_router)
router.include_router(categories_router)
router.include_router(ingredients_router)
router.include_router(extras_router)
router.include_router(favorites_router)

__all__ = ["router"]
