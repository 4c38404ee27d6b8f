"""
Singleton settings services: SiteSettings and AdminPreferences.

Both records live under SINGLETON_KEY. Reads create the row with
defaults on first access; writes update it in place.

Usage:
    from store_api.services.domain import SiteSettingsService

    service = SiteSettingsService(db)
    current = service.get()
    updated = service.update({"is_multilingual": True, "supported_languages": ["fr", "en"]})
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from shared.utils.exceptions import ValidationError
from store_api.models import AdminPreferences, SiteSettings
from store_api.schemas import AdminPreferencesOutput, SiteSettingsOutput
from store_api.services.base_service import SingletonService

logger = get_logger(__name__)

SettingsT = TypeVar("SettingsT", SiteSettings, AdminPreferences)
OutputT = TypeVar("OutputT", bound=BaseModel)


def apply_language_rules(current: Any, data: dict[str, Any]) -> dict[str, Any]:
    """
    Merge a language update into the current values.

    - multilingual off: supported_languages collapses to [default_language]
    - multilingual on: default_language must be one of supported_languages

    Raises:
        ValidationError: default language not among the supported ones.
    """
    is_multilingual = data.get("is_multilingual", current.is_multilingual)
    default_language = data.get("default_language", current.default_language)
    supported = list(data.get("supported_languages") or current.supported_languages or [])

    if not is_multilingual:
        supported = [default_language]
    elif default_language not in supported:
        raise ValidationError(
            "Default language must be one of the supported languages",
            details=[{
                "field": "defaultLanguage",
                "message": f"'{default_language}' is not in supportedLanguages",
                "value": default_language,
            }],
        )

    return {
        "is_multilingual": is_multilingual,
        "default_language": default_language,
        "supported_languages": supported,
    }


class SingletonSettingsService(SingletonService[SettingsT, OutputT]):
    """
    Language settings singleton: updates in place, applying the language rules.
    """

    def update(
        self,
        data: dict[str, Any],
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> OutputT:
        entity = self._get_or_create()

        values = {k: v for k, v in data.items() if v is not None}
        values.update(apply_language_rules(entity, values))

        for field_name, value in values.items():
            setattr(entity, field_name, value)
        output = self._save(entity, user_id, user_email)

        logger.info(f"{self.entity_name} updated", fields=sorted(data), user_id=user_id)
        return output


class SiteSettingsService(SingletonSettingsService[SiteSettings, SiteSettingsOutput]):
    """Public site settings (title and languages)."""

    output_schema = SiteSettingsOutput
    entity_name = "Site settings"

    def __init__(self, db: Session):
        super().__init__(db, SiteSettings)


class AdminPreferencesService(SingletonSettingsService[AdminPreferences, AdminPreferencesOutput]):
    """Back-office language preferences."""

    output_schema = AdminPreferencesOutput
    entity_name = "Admin preferences"

    def __init__(self, db: Session):
        super().__init__(db, AdminPreferences)
