"""
Customer engagement services: favorites and reviews.

Usage:
    from store_api.services.domain import FavoriteService, ReviewService

    FavoriteService(db).add(user_id, product_id)
    page = ReviewService(db).list_reviews(product_id, page=1, limit=10)
"""

from __future__ import annotations

import math
from typing import Any

from sqlalchemy.orm import Session

from shared.config.constants import Limits, Roles
from shared.config.logging import get_logger
from shared.utils.exceptions import ConflictError, ForbiddenError, NotFoundError
from store_api.models import Product, ProductRating, UserFavorite
from store_api.repositories import FavoriteRepository, ProductRepository, RatingRepository
from store_api.schemas import FavoriteOutput, FavoriteStatus, ReviewOutput, ReviewPage
from store_api.services.base_service import BaseService
from store_api.services.catalog.pagination import coerce_limit, coerce_page
from store_api.services.catalog.records import record_from_model
from store_api.services.product_view import product_summary

logger = get_logger(__name__)


def _require_product(db: Session, product_id: str) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


class FavoriteService(BaseService[UserFavorite]):
    """
    Service for user favorites.

    Business rules:
    - One favorite per (user, product)
    - Favoriting an unknown product is a 404
    """

    def __init__(self, db: Session):
        super().__init__(db, FavoriteRepository(db))

    @property
    def repo(self) -> FavoriteRepository:
        return self._repo  # type: ignore[return-value]

    def status(self, user_id: str, product_id: str) -> FavoriteStatus:
        _require_product(self._db, product_id)
        favorite = self.repo.find_for_user(user_id, product_id)
        return FavoriteStatus(product_id=product_id, is_favorite=favorite is not None)

    def list_for_user(self, user_id: str, locale: str | None = None) -> list[FavoriteOutput]:
        """The user's favorite products, most recently added first."""
        favorites = self.repo.find_all(UserFavorite.user_id == user_id)
        return [
            FavoriteOutput(
                id=favorite.id,
                product_id=favorite.product_id,
                created_at=favorite.created_at,
                product=product_summary(record_from_model(favorite.product), locale),
            )
            for favorite in favorites
        ]

    def add(self, user_id: str, product_id: str) -> FavoriteStatus:
        """
        Raises:
            NotFoundError: Unknown product.
            ConflictError: Already a favorite.
        """
        _require_product(self._db, product_id)
        if self.repo.find_for_user(user_id, product_id) is not None:
            raise ConflictError("Product already in favorites", product_id=product_id)

        favorite = UserFavorite(user_id=user_id, product_id=product_id)
        favorite.set_created_by(user_id, None)
        self.repo.add(favorite)
        self._commit("add favorite", user_id=user_id, product_id=product_id)

        logger.info("Favorite added", user_id=user_id, product_id=product_id)
        return FavoriteStatus(product_id=product_id, is_favorite=True)

    def remove(self, user_id: str, product_id: str) -> FavoriteStatus:
        """
        Raises:
            NotFoundError: Product is not among the user's favorites.
        """
        favorite = self.repo.find_for_user(user_id, product_id)
        if favorite is None:
            raise NotFoundError("Favorite", product_id=product_id)

        self.repo.delete(favorite)
        self._commit("remove favorite", user_id=user_id, product_id=product_id)

        logger.info("Favorite removed", user_id=user_id, product_id=product_id)
        return FavoriteStatus(product_id=product_id, is_favorite=False)


class ReviewService(BaseService[ProductRating]):
    """
    Service for product reviews.

    Business rules:
    - One review per (user, product)
    - Only the author or an ADMIN may delete a review
    - Product rating/rating_count are recomputed after every change
    """

    def __init__(self, db: Session):
        super().__init__(db, RatingRepository(db))

    @property
    def repo(self) -> RatingRepository:
        return self._repo  # type: ignore[return-value]

    def list_reviews(self, product_id: str, page: Any = 1, limit: Any = None) -> ReviewPage:
        """Newest reviews first, with the product's average rating."""
        _require_product(self._db, product_id)

        page = coerce_page(page)
        limit = coerce_limit(limit, default=Limits.DEFAULT_REVIEW_PAGE_SIZE)
        criteria = [ProductRating.product_id == product_id]

        total = self.repo.count(*criteria)
        reviews = self.repo.find_all(*criteria, limit=limit, offset=(page - 1) * limit)
        average, _ = self.repo.stats(product_id)

        return ReviewPage(
            reviews=[self._to_output(r) for r in reviews],
            average_rating=average,
            total_reviews=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if total else 0,
        )

    def create(
        self,
        product_id: str,
        user_id: str,
        rating: int,
        comment: str | None = None,
        user_email: str | None = None,
    ) -> ReviewOutput:
        """
        Raises:
            NotFoundError: Unknown product.
            ConflictError: The user already reviewed this product.
        """
        product = _require_product(self._db, product_id)
        if self.repo.find_for_user(user_id, product_id) is not None:
            raise ConflictError(
                "You have already reviewed this product", product_id=product_id, user_id=user_id
            )

        review = ProductRating(
            user_id=user_id,
            product_id=product_id,
            rating=rating,
            comment=comment.strip() if comment else None,
        )
        review.set_created_by(user_id, user_email)
        self.repo.add(review)
        self._db.flush()

        self._recompute_rating(product)
        self._commit("create review", product_id=product_id, user_id=user_id)
        self.repo.refresh(review)

        logger.info("Review created", product_id=product_id, user_id=user_id, rating=rating)
        return self._to_output(review)

    def delete(self, product_id: str, review_id: str, ctx: dict[str, Any]) -> None:
        """
        Raises:
            NotFoundError: Unknown review for this product.
            ForbiddenError: Caller is neither the author nor an ADMIN.
        """
        review = self.repo.find_by_id(review_id)
        if review is None or review.product_id != product_id:
            raise NotFoundError("Review", review_id)

        if review.user_id != ctx.get("sub") and ctx.get("role") != Roles.ADMIN:
            raise ForbiddenError("delete this review", user_id=ctx.get("sub"), review_id=review_id)

        product = _require_product(self._db, product_id)
        self.repo.delete(review)
        self._db.flush()

        self._recompute_rating(product)
        self._commit("delete review", review_id=review_id)

        logger.info("Review deleted", review_id=review_id, product_id=product_id, user_id=ctx.get("sub"))

    def _recompute_rating(self, product: Product) -> None:
        average, count = self.repo.stats(product.id)
        product.rating = average
        product.rating_count = count

    def _to_output(self, review: ProductRating) -> ReviewOutput:
        return ReviewOutput(
            id=review.id,
            product_id=review.product_id,
            user_id=review.user_id,
            user_name=review.user.name if review.user else None,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )
