"""
Product Service.

Handles product business logic including:
- Product CRUD with multilingual name/description
- Ingredient and extra links (replaced as a whole on update)
- Bulk updates of collection flags (featured, popular, trending)

Listings do not go through this service: they run the catalog engine
over a snapshot (see services.catalog).

Usage:
    from store_api.services.domain import ProductService

    service = ProductService(db, locale="en")
    product = service.get_by_slug("margherita")
    results, message = service.bulk_update(items)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from shared.config.constants import Locales
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError, ValidationError
from store_api.models import Category, Extra, Ingredient, Product, ProductExtra, ProductIngredient
from store_api.repositories import ProductRepository
from store_api.schemas import BulkUpdateResult, ProductDetailOutput
from store_api.services.base_service import BaseCRUDService
from store_api.services.catalog.locale import resolve_multilingual
from store_api.services.product_view import product_detail

logger = get_logger(__name__)

COLLECTION_FLAGS = ("is_featured", "is_popular", "is_trending")


class ProductService(BaseCRUDService[Product, ProductDetailOutput]):
    """
    Service for product management.

    Business rules:
    - Category, ingredient and extra references must exist
    - Slug is derived from the name resolved in the default locale
    - Links are replaced as a whole when given on update
    - Deleting a product removes its links, ratings and favorites
    - Bulk updates report per item and never abort the batch
    """

    def __init__(self, db: Session, locale: str | None = None):
        super().__init__(
            db=db,
            repo=ProductRepository(db),
            output_schema=ProductDetailOutput,
            entity_name="Product",
        )
        self._locale = locale or Locales.DEFAULT

    @property
    def repo(self) -> ProductRepository:
        return self._repo  # type: ignore[return-value]

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_slug(self, slug: str) -> ProductDetailOutput:
        product = self.repo.find_by_slug(slug)
        if product is None:
            raise NotFoundError("Product", slug=slug)
        return self.to_output(product)

    def to_output(self, entity: Product) -> ProductDetailOutput:
        return product_detail(entity, self._locale)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(
        self,
        data: dict[str, Any],
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> ProductDetailOutput:
        """
        Create a product together with its ingredient and extra links.

        Raises:
            ValidationError: Unknown category, ingredient or extra.
        """
        ingredients = data.pop("ingredients", None) or []
        extras = data.pop("extras", None) or []

        self._validate_create(data)
        self._validate_links(ingredients, extras)

        data["slug"] = self._unique_slug(self._slug_source(data))

        product = Product(**data)
        product.set_created_by(user_id, user_email)
        self._add_links(product, ingredients, extras)

        self._repo.add(product)
        self._commit("create product")

        logger.info("Product created", product_id=product.id, slug=product.slug, user_id=user_id)
        return self.get_by_id(product.id)

    def update(
        self,
        entity_id: str,
        data: dict[str, Any],
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> ProductDetailOutput:
        """
        Update product fields. ingredients/extras, when present, replace
        the existing links.
        """
        product = self.get_entity(entity_id)

        ingredients = data.pop("ingredients", None)
        extras = data.pop("extras", None)

        data = self._drop_required_nulls(data)
        self._validate_update(product, data)
        self._validate_links(ingredients or [], extras or [])

        if "name" in data and data["name"] != product.name:
            data["slug"] = self._unique_slug(self._slug_source(data), exclude_id=product.id)

        for field_name, value in data.items():
            if hasattr(product, field_name):
                setattr(product, field_name, value)
        product.set_updated_by(user_id, user_email)

        if ingredients is not None:
            product.product_ingredients.clear()
        if extras is not None:
            product.product_extras.clear()
        # Orphans must be gone before re-adding the same ingredient/extra
        self._db.flush()
        self._add_links(product, ingredients or [], extras or [])

        self._commit("update product", product_id=entity_id)

        logger.info("Product updated", product_id=entity_id, user_id=user_id)
        return self.to_output(self.get_entity(entity_id))

    def bulk_update(
        self,
        items: list[dict[str, Any]],
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> tuple[list[BulkUpdateResult], str]:
        """
        Set collection flags on many products.

        Returns:
            Per-item results and a summary message.
        """
        results: list[BulkUpdateResult] = []

        for item in items:
            product_id = item["id"]
            product = self._db.get(Product, product_id)
            if product is None:
                results.append(
                    BulkUpdateResult(id=product_id, success=False, error="Product not found")
                )
                continue

            changes = {k: item[k] for k in COLLECTION_FLAGS if item.get(k) is not None}
            if not changes:
                results.append(
                    BulkUpdateResult(id=product_id, success=False, error="No fields to update")
                )
                continue

            for field_name, value in changes.items():
                setattr(product, field_name, value)
            product.set_updated_by(user_id, user_email)
            results.append(BulkUpdateResult(id=product_id, success=True))

        updated = sum(1 for r in results if r.success)
        failed = len(results) - updated
        if updated:
            self._commit("bulk update products", count=updated)

        message = f"{updated} products updated successfully"
        if failed:
            message += f", {failed} errors"

        logger.info("Products bulk updated", updated=updated, failed=failed, user_id=user_id)
        return results, message

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._validate_category(data.get("category_id"))

    def _validate_update(self, entity: Product, data: dict[str, Any]) -> None:
        if "category_id" in data:
            self._validate_category(data["category_id"])

    def _validate_category(self, category_id: str | None) -> None:
        if category_id is not None and self._db.get(Category, category_id) is None:
            raise ValidationError(
                "Category does not exist",
                details=[{"field": "categoryId", "message": "unknown category", "value": category_id}],
            )

    def _validate_links(self, ingredients: list[dict[str, Any]], extras: list[dict[str, Any]]) -> None:
        errors = []

        ingredient_ids = [link["ingredient_id"] for link in ingredients]
        if len(set(ingredient_ids)) != len(ingredient_ids):
            errors.append({"field": "ingredients", "message": "duplicate ingredient"})
        for ingredient_id in dict.fromkeys(ingredient_ids):
            if self._db.get(Ingredient, ingredient_id) is None:
                errors.append(
                    {"field": "ingredients", "message": "unknown ingredient", "value": ingredient_id}
                )

        extra_ids = [link["extra_id"] for link in extras]
        if len(set(extra_ids)) != len(extra_ids):
            errors.append({"field": "extras", "message": "duplicate extra"})
        for extra_id in dict.fromkeys(extra_ids):
            if self._db.get(Extra, extra_id) is None:
                errors.append({"field": "extras", "message": "unknown extra", "value": extra_id})

        if errors:
            raise ValidationError("Invalid product links", details=errors)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _slug_source(self, data: dict[str, Any]) -> str:
        return resolve_multilingual(data.get("name"), Locales.DEFAULT)

    def _add_links(
        self,
        product: Product,
        ingredients: list[dict[str, Any]],
        extras: list[dict[str, Any]],
    ) -> None:
        for link in ingredients:
            product.product_ingredients.append(
                ProductIngredient(
                    ingredient_id=link["ingredient_id"],
                    is_optional=link.get("is_optional", False),
                    is_removable=link.get("is_removable", True),
                    quantity=link.get("quantity"),
                )
            )
        for link in extras:
            product.product_extras.append(
                ProductExtra(extra_id=link["extra_id"], price=link.get("price"))
            )
