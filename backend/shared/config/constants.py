"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Roles, STAFF_ROLES, Limits

    if role in STAFF_ROLES:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    USER: Final[str] = "USER"
    EMPLOYEE: Final[str] = "EMPLOYEE"
    ADMIN: Final[str] = "ADMIN"

    ALL: Final[list[str]] = [USER, EMPLOYEE, ADMIN]


# Role groups for common access patterns
STAFF_ROLES: Final[frozenset[str]] = frozenset({Roles.ADMIN, Roles.EMPLOYEE})
ALL_ROLES: Final[frozenset[str]] = frozenset(Roles.ALL)


# =============================================================================
# Locales
# =============================================================================


class Locales:
    """Locale codes and the resolution fallback chain."""

    FR: Final[str] = "fr"
    EN: Final[str] = "en"

    # Tried in order after the requested locale
    FALLBACK_CHAIN: Final[tuple[str, ...]] = (FR, EN)

    DEFAULT: Final[str] = FR

    SUPPORTED: Final[frozenset[str]] = frozenset({
        "fr", "en", "es", "de", "it", "pt", "nl", "pl", "ru", "ar", "zh", "ja",
        "ko", "tr", "sv", "da", "no", "fi", "el", "he", "hi", "hu", "cs", "ro",
        "uk", "bg", "hr", "sr", "sk", "sl", "et", "lv", "lt",
    })


# =============================================================================
# Catalog Vocabulary
# =============================================================================


class Allergens:
    """Allergen codes accepted on ingredients and extras (EU 14)."""

    ALL: Final[frozenset[str]] = frozenset({
        "gluten", "lactose", "eggs", "fish", "crustaceans", "molluscs",
        "peanuts", "treeNuts", "soy", "celery", "mustard", "sesame",
        "sulphites", "lupin",
    })


class ExtraType:
    """Extra (add-on) type constants."""

    SIZE: Final[str] = "size"
    TOPPING: Final[str] = "topping"
    SIDE: Final[str] = "side"
    SAUCE: Final[str] = "sauce"
    DRINK: Final[str] = "drink"
    OTHER: Final[str] = "other"

    ALL: Final[list[str]] = [SIZE, TOPPING, SIDE, SAUCE, DRINK, OTHER]


class SortFields:
    """Sortable product fields for catalog listings."""

    CREATED_AT: Final[str] = "created_at"
    NAME: Final[str] = "name"
    PRICE: Final[str] = "price"
    RATING: Final[str] = "rating"
    POPULARITY: Final[str] = "popularity"
    DISPLAY_ORDER: Final[str] = "display_order"
    PREPARATION_TIME: Final[str] = "preparation_time"

    ALL: Final[frozenset[str]] = frozenset({
        CREATED_AT, NAME, PRICE, RATING, POPULARITY, DISPLAY_ORDER, PREPARATION_TIME,
    })

    DEFAULT: Final[str] = CREATED_AT


class SortDirection:
    """Sort direction constants."""

    ASC: Final[str] = "asc"
    DESC: Final[str] = "desc"

    ALL: Final[frozenset[str]] = frozenset({ASC, DESC})

    DEFAULT: Final[str] = DESC


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # Rating bounds
    MIN_RATING: Final[int] = 0
    MAX_RATING: Final[int] = 5
    MIN_REVIEW_RATING: Final[int] = 1

    # Popularity score bounds
    MAX_POPULARITY_SCORE: Final[int] = 100

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_COMMENT_LENGTH: Final[int] = 1000
    MAX_URL_LENGTH: Final[int] = 2048
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 20
    MAX_PAGE_SIZE: Final[int] = 100
    DEFAULT_REVIEW_PAGE_SIZE: Final[int] = 10

    # Bulk operations
    MAX_BULK_UPDATE_ITEMS: Final[int] = 200

    # Home page
    MAX_FEATURE_ITEMS: Final[int] = 6


# =============================================================================
# Singleton Records
# =============================================================================


SINGLETON_KEY: Final[str] = "singleton"


# =============================================================================
# Error Messages
# =============================================================================


class ErrorMessages:
    """Standardized error messages."""

    NOT_AUTHENTICATED: Final[str] = "Authentication required"
    INVALID_TOKEN: Final[str] = "Invalid token"
    TOKEN_EXPIRED: Final[str] = "Token has expired"
    INSUFFICIENT_PERMISSIONS: Final[str] = "Insufficient permissions"

    CATEGORY_HAS_PRODUCTS: Final[str] = (
        "Cannot delete category with products. Move products to another category first."
    )
    CATEGORY_HAS_CHILDREN: Final[str] = (
        "Cannot delete category with subcategories. Delete subcategories first."
    )
    INTERNAL_ERROR: Final[str] = "Internal server error"
    INVALID_PARAMETERS: Final[str] = "Invalid parameters"
