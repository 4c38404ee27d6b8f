"""
Customer Engagement Models: ProductRating, UserFavorite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, new_id

if TYPE_CHECKING:
    from .catalog import Product
    from .user import User


class ProductRating(AuditMixin, Base):
    """
    A user's review of a product. One per (user, product).
    """

    __tablename__ = "product_rating"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text)

    user: Mapped["User"] = relationship(back_populates="ratings")
    product: Mapped["Product"] = relationship(back_populates="ratings")

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_rating_user_product"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="chk_rating_range"),
    )


class UserFavorite(AuditMixin, Base):
    """
    Product bookmarked by a user. One per (user, product).
    """

    __tablename__ = "user_favorite"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship(back_populates="favorites")
    product: Mapped["Product"] = relationship(back_populates="favorites")

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_favorite_user_product"),
    )
