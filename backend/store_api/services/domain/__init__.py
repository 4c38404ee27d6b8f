"""
Domain Services.

Services contain business logic and orchestrate operations. They use
Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from store_api.services.domain import CategoryService

    # In router
    service = CategoryService(db)
    categories, total = service.list_categories(PageRequest(page=1), active_only=True)
"""

from .category_service import CategoryService
from .ingredient_service import IngredientService
from .extra_service import ExtraService
from .product_service import ProductService
from .engagement_service import FavoriteService, ReviewService
from .settings_service import (
    SiteSettingsService,
    AdminPreferencesService,
    apply_language_rules,
)
from .content_service import HomePageService, TranslationService

__all__ = [
    "CategoryService",
    "IngredientService",
    "ExtraService",
    "ProductService",
    "FavoriteService",
    "ReviewService",
    "SiteSettingsService",
    "AdminPreferencesService",
    "apply_language_rules",
    "HomePageService",
    "TranslationService",
]
