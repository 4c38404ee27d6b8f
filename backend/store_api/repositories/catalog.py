"""
Catalog repositories with entity-specific queries.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from store_api.models import (
    Category,
    Extra,
    Ingredient,
    Product,
    ProductExtra,
    ProductIngredient,
    ProductRating,
    UserFavorite,
)
from .base import Repository


class CategoryRepository(Repository[Category]):
    """Categories, ordered by display_order then name."""

    def __init__(self, session: Session):
        super().__init__(Category, session)

    def _base_query(self) -> Select:
        return select(Category).order_by(Category.display_order, Category.name)

    def count_products(self, category_id: str) -> int:
        return self.session.scalar(
            select(func.count()).select_from(Product).where(Product.category_id == category_id)
        ) or 0

    def count_children(self, category_id: str) -> int:
        return self.count(Category.parent_id == category_id)


class ProductRepository(Repository[Product]):
    """
    Products with their ingredient and extra links eagerly loaded.
    """

    def __init__(self, session: Session):
        super().__init__(Product, session)

    def _base_query(self) -> Select:
        return select(Product).options(
            selectinload(Product.category),
            selectinload(Product.product_ingredients).selectinload(ProductIngredient.ingredient),
            selectinload(Product.product_extras).selectinload(ProductExtra.extra),
        )

    def find_by_slug(self, slug: str) -> Product | None:
        return self.find_one(Product.slug == slug)


class IngredientRepository(Repository[Ingredient]):
    def __init__(self, session: Session):
        super().__init__(Ingredient, session)

    def _base_query(self) -> Select:
        return select(Ingredient).order_by(Ingredient.name)

    def count_product_links(self, ingredient_id: str) -> int:
        return self.session.scalar(
            select(func.count())
            .select_from(ProductIngredient)
            .where(ProductIngredient.ingredient_id == ingredient_id)
        ) or 0


class ExtraRepository(Repository[Extra]):
    def __init__(self, session: Session):
        super().__init__(Extra, session)

    def _base_query(self) -> Select:
        return select(Extra).order_by(Extra.type, Extra.name)

    def count_product_links(self, extra_id: str) -> int:
        return self.session.scalar(
            select(func.count())
            .select_from(ProductExtra)
            .where(ProductExtra.extra_id == extra_id)
        ) or 0


class RatingRepository(Repository[ProductRating]):
    """Reviews, newest first."""

    def __init__(self, session: Session):
        super().__init__(ProductRating, session)

    def _base_query(self) -> Select:
        return (
            select(ProductRating)
            .options(selectinload(ProductRating.user))
            .order_by(ProductRating.created_at.desc(), ProductRating.id)
        )

    def find_for_user(self, user_id: str, product_id: str) -> ProductRating | None:
        return self.find_one(
            ProductRating.user_id == user_id,
            ProductRating.product_id == product_id,
        )

    def stats(self, product_id: str) -> tuple[float | None, int]:
        """(average rating, number of ratings) for a product."""
        avg, count = self.session.execute(
            select(func.avg(ProductRating.rating), func.count(ProductRating.id))
            .where(ProductRating.product_id == product_id)
        ).one()
        return (float(avg) if avg is not None else None, count or 0)


class FavoriteRepository(Repository[UserFavorite]):
    """Favorites, newest first."""

    def __init__(self, session: Session):
        super().__init__(UserFavorite, session)

    def _base_query(self) -> Select:
        return (
            select(UserFavorite)
            .options(selectinload(UserFavorite.product))
            .order_by(UserFavorite.created_at.desc(), UserFavorite.id)
        )

    def find_for_user(self, user_id: str, product_id: str) -> UserFavorite | None:
        return self.find_one(
            UserFavorite.user_id == user_id,
            UserFavorite.product_id == product_id,
        )
