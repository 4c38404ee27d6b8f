"""
Home page and site content served from the CMS.

Every multilingual field of a CMS document is resolved for the request
locale with localize_document(); CMS metadata keys (_id, _type, ...)
are passed through untouched.
"""

from __future__ import annotations

from typing import Any

from shared.config.constants import Locales
from shared.config.logging import content_logger as logger
from store_api.services.catalog.locale import localize_document
from store_api.services.content.cms_client import CMSClient

HOME_DOCUMENT = "home"
SETTINGS_DOCUMENT = "settings"


class HomeContentService:
    """
    Reads home/settings documents through a CMSClient.

    Usage:
        service = HomeContentService(cms)
        content = service.get_localized("en")
    """

    def __init__(self, cms: CMSClient):
        self._cms = cms

    def get_localized(self, locale: str | None = None) -> dict[str, Any] | None:
        """The first home document, localized. None when there is none."""
        locale = locale or Locales.DEFAULT
        document = self._cms.fetch_first(HOME_DOCUMENT)
        if document is None:
            logger.info("No home document in CMS")
            return None
        return localize_document(document, locale)

    def get_all_localized(self, locale: str | None = None) -> list[dict[str, Any]]:
        locale = locale or Locales.DEFAULT
        return [localize_document(doc, locale) for doc in self._cms.fetch_all(HOME_DOCUMENT)]

    def get_by_id(self, doc_id: str, locale: str | None = None) -> dict[str, Any] | None:
        document = self._cms.fetch_by_id(HOME_DOCUMENT, doc_id)
        if document is None:
            return None
        return localize_document(document, locale or Locales.DEFAULT)

    def get_raw(self) -> list[dict[str, Any]]:
        """Home documents with every locale variant kept."""
        return self._cms.fetch_all(HOME_DOCUMENT)

    def get_site_content(self, locale: str | None = None) -> dict[str, Any] | None:
        """The CMS settings document (site name, navigation labels), localized."""
        document = self._cms.fetch_first(SETTINGS_DOCUMENT)
        if document is None:
            return None
        return localize_document(document, locale or Locales.DEFAULT)
