"""
Ingredient Models: Ingredient, Extra and their product links.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON, Boolean, CheckConstraint, Float, ForeignKey, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import ExtraType

from .base import AuditMixin, Base, new_id

if TYPE_CHECKING:
    from .catalog import Product


class Ingredient(AuditMixin, Base):
    """
    Ingredient with allergen and dietary information.
    """

    __tablename__ = "ingredient"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(Text)
    allergens: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_vegetarian: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_vegan: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_gluten_free: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    product_ingredients: Mapped[list["ProductIngredient"]] = relationship(
        back_populates="ingredient"
    )


class Extra(AuditMixin, Base):
    """
    Optional add-on (size, topping, side, sauce, drink) sold with products.
    """

    __tablename__ = "extra"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=ExtraType.OTHER)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    max_quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    allergens: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    product_extras: Mapped[list["ProductExtra"]] = relationship(back_populates="extra")

    __table_args__ = (
        CheckConstraint("price >= 0", name="chk_extra_price_non_negative"),
    )


class ProductIngredient(Base):
    """
    Many-to-many relationship between products and ingredients.
    """

    __tablename__ = "product_ingredient"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("ingredient.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    is_optional: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_removable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    quantity: Mapped[Optional[str]] = mapped_column(Text)  # e.g. "200g", "2 slices"

    # Relationships
    product: Mapped["Product"] = relationship(back_populates="product_ingredients")
    ingredient: Mapped["Ingredient"] = relationship(back_populates="product_ingredients")

    __table_args__ = (
        UniqueConstraint("product_id", "ingredient_id", name="uq_product_ingredient"),
    )


class ProductExtra(Base):
    """
    Many-to-many relationship between products and extras.
    price overrides the extra's own price for this product when set.
    """

    __tablename__ = "product_extra"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True
    )
    extra_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("extra.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Relationships
    product: Mapped["Product"] = relationship(back_populates="product_extras")
    extra: Mapped["Extra"] = relationship(back_populates="product_extras")

    __table_args__ = (
        UniqueConstraint("product_id", "extra_id", name="uq_product_extra"),
    )
