"""
Filter normalization for catalog listings.

ProductFilters is the validated form of the listing parameters.
normalize_filters() builds one from any mapping (query-string values,
JSON values or Python values). Absent or empty parameters impose no
constraint. Invalid values are reported together as one ValidationError.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from shared.config.constants import ErrorMessages, Limits
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import CamelModel
from shared.utils.validators import sanitize_search_term


class ProductFilters(CamelModel):
    """Validated listing filters. None means "no constraint"."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    category_id: str | None = None
    search: str | None = None
    is_available: bool | None = None
    price_min: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    price_max: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    rating_min: float | None = Field(
        default=None, ge=Limits.MIN_RATING, le=Limits.MAX_RATING, allow_inf_nan=False
    )
    is_featured: bool | None = None
    is_popular: bool | None = None
    is_trending: bool | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_as_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("search")
    @classmethod
    def _clean_search(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return sanitize_search_term(value) or None

    @field_validator("price_max")
    @classmethod
    def _price_range(cls, value: float | None, info: ValidationInfo) -> float | None:
        price_min = info.data.get("price_min")
        if value is not None and price_min is not None and price_min > value:
            raise ValueError("priceMax must be greater than or equal to priceMin")
        return value

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


def validation_details(exc: PydanticValidationError) -> list[dict[str, Any]]:
    """One {field, message, value} entry per pydantic error."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or None,
            "message": err["msg"],
            "value": err.get("input"),
        }
        for err in exc.errors()
    ]


def normalize_filters(raw_params: Mapping[str, Any] | None) -> ProductFilters:
    """
    Validate raw listing parameters.

    Parameters are accepted under their camelCase or snake_case names.
    Unknown parameters (sorting, paging, locale) are ignored.

    Raises:
        ValidationError: With one details entry per offending parameter.
    """
    try:
        return ProductFilters.model_validate(dict(raw_params or {}))
    except PydanticValidationError as e:
        details = validation_details(e)
        raise ValidationError(
            ErrorMessages.INVALID_PARAMETERS,
            details=details,
            fields=[d["field"] for d in details],
        )
