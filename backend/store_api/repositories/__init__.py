"""
Repository Pattern implementation.

Usage:
    from store_api.repositories import ProductRepository

    repo = ProductRepository(db)
    product = repo.find_by_slug("margherita")
"""

from .base import Repository
from .catalog import (
    CategoryRepository,
    ProductRepository,
    IngredientRepository,
    ExtraRepository,
    RatingRepository,
    FavoriteRepository,
)

__all__ = [
    "Repository",
    "CategoryRepository",
    "ProductRepository",
    "IngredientRepository",
    "ExtraRepository",
    "RatingRepository",
    "FavoriteRepository",
]
