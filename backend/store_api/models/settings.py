"""
Singleton configuration models: SiteSettings, AdminPreferences.

Each table holds at most one live row, keyed by SINGLETON_KEY.
"""

from __future__ import annotations

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import Locales, SINGLETON_KEY

from .base import AuditMixin, Base


def _default_languages() -> list[str]:
    return [Locales.DEFAULT]


class SiteSettings(AuditMixin, Base):
    """Public site configuration (title, languages)."""

    __tablename__ = "site_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=SINGLETON_KEY)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_multilingual: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    supported_languages: Mapped[list[str]] = mapped_column(
        JSON, default=_default_languages, nullable=False
    )
    default_language: Mapped[str] = mapped_column(
        String(10), default=Locales.DEFAULT, nullable=False
    )


class AdminPreferences(AuditMixin, Base):
    """Back-office language preferences."""

    __tablename__ = "admin_preferences"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=SINGLETON_KEY)
    is_multilingual: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    supported_languages: Mapped[list[str]] = mapped_column(
        JSON, default=_default_languages, nullable=False
    )
    default_language: Mapped[str] = mapped_column(
        String(10), default=Locales.DEFAULT, nullable=False
    )
