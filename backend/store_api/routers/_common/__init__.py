"""
Common utilities shared across routers.
"""

from .deps import (
    require_staff,
    require_admin,
    get_locale,
    get_page_request,
    get_product_filters,
    get_user_id,
    get_user_email,
)
from .responses import ok

__all__ = [
    "require_staff",
    "require_admin",
    "get_locale",
    "get_page_request",
    "get_product_filters",
    "get_user_id",
    "get_user_email",
    "ok",
]
