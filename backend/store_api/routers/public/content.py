"""
Public content endpoints (no authentication): CMS home content and
the storefront's language settings.
"""

from collections.abc import Generator

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from store_api.routers._common import get_locale, ok
from store_api.services.content import CMSClient, HomeContentService
from store_api.services.domain import SiteSettingsService


router = APIRouter(prefix="/api/public", tags=["public"])


def get_cms_client() -> Generator[CMSClient, None, None]:
    """One CMS client per request, closed afterwards."""
    client = CMSClient.from_settings()
    try:
        yield client
    finally:
        client.close()


def get_home_content_service(cms: CMSClient = Depends(get_cms_client)) -> HomeContentService:
    return HomeContentService(cms)


@router.get("/home-content")
def get_home_content(
    raw: bool = Query(default=False, description="Keep every locale variant"),
    all_documents: bool = Query(default=False, alias="all"),
    doc_id: str | None = Query(default=None, alias="id"),
    locale: str = Depends(get_locale),
    service: HomeContentService = Depends(get_home_content_service),
) -> dict:
    """
    Home page content localized for ``locale``.

    ``id`` selects one document, ``raw=true`` returns every home document
    unlocalized and ``all=true`` every home document localized.
    """
    if doc_id:
        return ok(service.get_by_id(doc_id, locale))
    if raw:
        return ok(service.get_raw())
    if all_documents:
        return ok(service.get_all_localized(locale))
    return ok(service.get_localized(locale))


@router.get("/site-content")
def get_site_content(
    locale: str = Depends(get_locale),
    service: HomeContentService = Depends(get_home_content_service),
) -> dict:
    """CMS settings document (navigation, labels) localized for ``locale``."""
    return ok(service.get_site_content(locale))


@router.get("/settings")
def get_public_settings(db: Session = Depends(get_db)) -> dict:
    """Site title and languages for the storefront."""
    return ok(SiteSettingsService(db).get())
