"""
Product view mapping.

Turns catalog records and ORM products into response schemas with
name/description resolved for the request locale. Used by:
- the catalog listing (records from the engine)
- product detail, favorites and CRUD responses (ORM products)
"""

from __future__ import annotations

from shared.config.constants import Locales
from store_api.models import Product
from store_api.schemas import (
    CategoryOutput,
    ProductDetailOutput,
    ProductExtraOutput,
    ProductIngredientOutput,
    ProductOutput,
)
from store_api.services.catalog.locale import to_storage
from store_api.services.catalog.records import ProductRecord, record_from_model


def product_summary(record: ProductRecord, locale: str | None = None) -> ProductOutput:
    """Listing item for a catalog record."""
    locale = locale or Locales.DEFAULT
    return ProductOutput(
        id=record.id,
        name=to_storage(record.name) or "",
        description=to_storage(record.description),
        display_name=record.display_name(locale),
        display_description=record.display_description(locale),
        slug=record.slug,
        price=record.price,
        image=record.image,
        is_available=record.is_available,
        category_id=record.category_id,
        rating=record.rating,
        rating_count=record.rating_count,
        is_featured=record.is_featured,
        is_popular=record.is_popular,
        is_trending=record.is_trending,
        popularity_score=record.popularity_score,
        display_order=record.display_order,
        preparation_time=record.preparation_time,
        created_at=record.created_at,
    )


def product_detail(product: Product, locale: str | None = None) -> ProductDetailOutput:
    """Full product view with category, ingredients and extras."""
    summary = product_summary(record_from_model(product), locale)

    ingredients = [
        ProductIngredientOutput(
            ingredient_id=link.ingredient_id,
            name=link.ingredient.name,
            allergens=list(link.ingredient.allergens or []),
            is_optional=link.is_optional,
            is_removable=link.is_removable,
            quantity=link.quantity,
        )
        for link in product.product_ingredients
    ]

    extras = [
        ProductExtraOutput(
            extra_id=link.extra_id,
            name=link.extra.name,
            type=link.extra.type,
            price=link.price if link.price is not None else link.extra.price,
        )
        for link in product.product_extras
    ]

    return ProductDetailOutput(
        **summary.model_dump(),
        category=CategoryOutput.model_validate(product.category) if product.category else None,
        ingredients=ingredients,
        extras=extras,
        updated_at=product.updated_at,
    )
