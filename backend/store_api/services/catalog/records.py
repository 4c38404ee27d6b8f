"""
Immutable product records the catalog engine operates on.

load_product_snapshot() reads the product table once per listing and
freezes every row into a ProductRecord, so the engine never touches
the session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from shared.config.constants import SortFields
from store_api.models import Product
from store_api.services.catalog.locale import (
    MultilingualValue,
    as_multilingual,
    resolve_multilingual,
    variants,
)


@dataclass(frozen=True)
class ProductRecord:
    id: str
    name: MultilingualValue
    slug: str = ""
    description: MultilingualValue | None = None
    price: float = 0.0
    is_available: bool = True
    category_id: str | None = None
    rating: float | None = None
    rating_count: int = 0
    is_featured: bool = False
    is_popular: bool = False
    is_trending: bool = False
    popularity_score: int = 0
    display_order: int = 0
    preparation_time: int = 15
    image: str | None = None
    created_at: datetime | None = None

    def display_name(self, locale: str | None) -> str:
        return resolve_multilingual(self.name, locale)

    def display_description(self, locale: str | None) -> str:
        return resolve_multilingual(self.description, locale)

    def matches_search(self, term: str) -> bool:
        """Case-insensitive substring match against every locale variant."""
        needle = term.casefold()
        return any(
            needle in text.casefold()
            for text in (*variants(self.name), *variants(self.description))
        )


# Sort field -> key function (record, locale) -> comparable or None
SORT_KEYS: dict[str, Callable[[ProductRecord, str | None], Any]] = {
    SortFields.CREATED_AT: lambda r, _: r.created_at,
    SortFields.NAME: lambda r, locale: r.display_name(locale),
    SortFields.PRICE: lambda r, _: r.price,
    SortFields.RATING: lambda r, _: r.rating,
    SortFields.POPULARITY: lambda r, _: r.popularity_score,
    SortFields.DISPLAY_ORDER: lambda r, _: r.display_order,
    SortFields.PREPARATION_TIME: lambda r, _: r.preparation_time,
}


def record_from_model(product: Product) -> ProductRecord:
    """Freeze an ORM product."""
    return ProductRecord(
        id=product.id,
        name=as_multilingual(product.name) or as_multilingual(""),
        slug=product.slug,
        description=as_multilingual(product.description),
        price=float(product.price or 0),
        is_available=bool(product.is_available),
        category_id=product.category_id,
        rating=product.rating,
        rating_count=product.rating_count or 0,
        is_featured=bool(product.is_featured),
        is_popular=bool(product.is_popular),
        is_trending=bool(product.is_trending),
        popularity_score=product.popularity_score or 0,
        display_order=product.display_order or 0,
        preparation_time=product.preparation_time,
        image=product.image,
        created_at=product.created_at,
    )


def load_product_snapshot(db: Session) -> tuple[ProductRecord, ...]:
    """All products, oldest first (ties by id), as immutable records."""
    rows = db.scalars(select(Product).order_by(Product.created_at, Product.id)).all()
    return tuple(record_from_model(p) for p in rows)
