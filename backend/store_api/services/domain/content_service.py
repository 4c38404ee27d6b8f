"""
Back-office content services: home page sections and interface translations.

Usage:
    from store_api.services.domain import HomePageService, TranslationService

    home = HomePageService(db).update(body, user_id, user_email)
    auth_strings = TranslationService(db).by_category("auth")
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from store_api.models import HomeContent, Translation
from store_api.repositories import Repository
from store_api.schemas import HomeContentOutput, HomeContentUpdate, TranslationOutput, TranslationUpsert
from store_api.services.base_service import BaseService, SingletonService

logger = get_logger(__name__)

HOME_SECTIONS = ("hero_banner", "features_section", "seo_metadata")


class HomePageService(SingletonService[HomeContent, HomeContentOutput]):
    """
    Editable home page: hero banner, features section and SEO metadata.

    Sections absent from an update keep their stored value.
    """

    output_schema = HomeContentOutput
    entity_name = "Home content"

    def __init__(self, db: Session):
        super().__init__(db, HomeContent)

    def update(
        self,
        data: HomeContentUpdate,
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> HomeContentOutput:
        entity = self._get_or_create()

        changed = []
        for section in HOME_SECTIONS:
            value = getattr(data, section)
            if value is not None:
                setattr(entity, section, value.model_dump(mode="json"))
                changed.append(section)
        output = self._save(entity, user_id, user_email)

        logger.info("Home content updated", sections=changed, user_id=user_id)
        return output


class TranslationService(BaseService[Translation]):
    """Interface strings grouped by category, upserted by key."""

    def __init__(self, db: Session):
        super().__init__(db, Repository(Translation, db))

    def by_category(self, category: str) -> dict[str, dict[str, str]]:
        """{key: {locale: text}} for every translation of category."""
        rows = self._repo.find_all(Translation.category == category, order_by=Translation.key)
        return {row.key: dict(row.texts or {}) for row in rows}

    def upsert(
        self,
        data: TranslationUpsert,
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> TranslationOutput:
        """Create the translation for data.key, or replace its category and texts."""
        entity = self._repo.find_one(Translation.key == data.key)
        created = entity is None
        if created:
            entity = Translation(key=data.key)
            entity.set_created_by(user_id, user_email)
            self._repo.add(entity)
        else:
            entity.set_updated_by(user_id, user_email)

        entity.category = data.category
        entity.texts = dict(data.translations)

        self._commit("save translation", key=data.key)
        self._repo.refresh(entity)

        logger.info(
            "Translation created" if created else "Translation updated",
            key=data.key,
            category=data.category,
            user_id=user_id,
        )
        return TranslationOutput.model_validate(entity)

