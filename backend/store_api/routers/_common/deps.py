"""
Shared router dependencies: roles, locale, paging and user helpers.
"""

from typing import Any

from fastapi import Depends, Query, Request

from shared.config.constants import STAFF_ROLES, Roles
from shared.config.settings import settings
from shared.security.auth import current_user_context, require_roles
from store_api.services.catalog import PageRequest, ProductFilters, normalize_filters


# =============================================================================
# Role-based Dependencies
# =============================================================================


def require_staff(user: dict = Depends(current_user_context)) -> dict:
    """Dependency that requires ADMIN or EMPLOYEE role."""
    require_roles(user, STAFF_ROLES)
    return user


def require_admin(user: dict = Depends(current_user_context)) -> dict:
    """Dependency that requires ADMIN role."""
    require_roles(user, [Roles.ADMIN])
    return user


# =============================================================================
# Request Context
# =============================================================================


def get_locale(
    locale: str | None = Query(default=None, max_length=10, description="Display locale (fr, en, ...)"),
) -> str:
    """Requested display locale; unknown codes fall back during resolution."""
    return (locale or "").strip().lower() or settings.default_locale


def get_user_id(user: dict[str, Any]) -> str:
    return str(user["sub"])


def get_user_email(user: dict[str, Any]) -> str | None:
    return user.get("email")


def get_product_filters(request: Request) -> ProductFilters:
    """Listing filters from the query string (camelCase or snake_case names)."""
    return normalize_filters(request.query_params)


def get_page_request(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
) -> PageRequest:
    """Requested page within the configured page sizes; bad values are coerced."""
    return PageRequest(
        page=page,
        limit=limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
