"""
SQLAlchemy ORM Models Package.

- base: Base class and AuditMixin
- user: User
- catalog: Category, Product
- ingredient: Ingredient, Extra, ProductIngredient, ProductExtra
- engagement: ProductRating, UserFavorite
- settings: SiteSettings, AdminPreferences
- content: HomeContent, Translation
"""

from .base import Base, AuditMixin, new_id
from .user import User
from .catalog import Category, Product
from .ingredient import Ingredient, Extra, ProductIngredient, ProductExtra
from .engagement import ProductRating, UserFavorite
from .settings import SiteSettings, AdminPreferences
from .content import HomeContent, Translation

__all__ = [
    "Base",
    "AuditMixin",
    "new_id",
    "User",
    "Category",
    "Product",
    "Ingredient",
    "Extra",
    "ProductIngredient",
    "ProductExtra",
    "ProductRating",
    "UserFavorite",
    "SiteSettings",
    "AdminPreferences",
    "HomeContent",
    "Translation",
]
