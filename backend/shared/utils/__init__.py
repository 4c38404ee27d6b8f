"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
)
from shared.utils.validators import (
    validate_image_url,
    sanitize_search_term,
    slugify,
)
from shared.utils.schemas import CamelModel, ErrorResponse

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
    # validators
    "validate_image_url",
    "sanitize_search_term",
    "slugify",
    # schemas
    "CamelModel",
    "ErrorResponse",
]
