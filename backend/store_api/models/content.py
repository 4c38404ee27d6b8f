"""
Editable content models: HomeContent (singleton) and Translation.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import SINGLETON_KEY

from .base import AuditMixin, Base, new_id


class HomeContent(AuditMixin, Base):
    """
    Home page sections edited from the back office.

    Each section is stored whole as JSON; a missing section is NULL.
    """

    __tablename__ = "home_content"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=SINGLETON_KEY)
    hero_banner: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    features_section: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    seo_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)


class Translation(AuditMixin, Base):
    """
    Interface string in every locale, e.g. key "signIn.title" in category "auth".
    """

    __tablename__ = "translation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    key: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    texts: Mapped[dict[str, str]] = mapped_column(JSON, default=dict, nullable=False)
