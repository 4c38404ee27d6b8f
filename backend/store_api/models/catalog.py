"""
Catalog Models: Category, Product.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import (
    JSON, Boolean, CheckConstraint, Float, ForeignKey, Index, Integer, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, new_id

if TYPE_CHECKING:
    from .ingredient import ProductIngredient, ProductExtra
    from .engagement import ProductRating, UserFavorite


class Category(AuditMixin, Base):
    """
    Product category. Categories form a tree through parent_id.
    """

    __tablename__ = "category"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(Text)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    parent_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("category.id", ondelete="RESTRICT"), nullable=True, index=True
    )

    # Relationships
    parent: Mapped[Optional["Category"]] = relationship(
        back_populates="children", remote_side="Category.id"
    )
    children: Mapped[list["Category"]] = relationship(back_populates="parent")
    products: Mapped[list["Product"]] = relationship(back_populates="category")


class Product(AuditMixin, Base):
    """
    Sellable product.

    name and description hold either a plain string or a
    {locale: text} map (see services.catalog.locale).
    """

    __tablename__ = "product"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[Any] = mapped_column(JSON, nullable=False)
    description: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    image: Mapped[Optional[str]] = mapped_column(Text)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("category.id", ondelete="RESTRICT"), nullable=True, index=True
    )

    # Aggregated from ProductRating, recomputed on every rating change
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    rating_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Collection flags
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_popular: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_trending: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    popularity_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    preparation_time: Mapped[int] = mapped_column(Integer, default=15, nullable=False)  # minutes

    # Relationships
    category: Mapped[Optional["Category"]] = relationship(back_populates="products")
    product_ingredients: Mapped[list["ProductIngredient"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )
    product_extras: Mapped[list["ProductExtra"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )
    ratings: Mapped[list["ProductRating"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )
    favorites: Mapped[list["UserFavorite"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="chk_product_price_non_negative"),
        CheckConstraint("preparation_time >= 1", name="chk_product_preparation_time"),
        Index("ix_product_category_available", "category_id", "is_available"),
    )
