"""
Sort token compilation for catalog listings.

A sort token is "<field>_<direction>", e.g. "price_asc" or
"created_at_desc". Field names may contain underscores, so tokens are
always split on the LAST underscore. build_sort_token() is the only
place tokens are assembled and compile_sort() the only place they are
split.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shared.config.constants import ErrorMessages, SortDirection, SortFields
from shared.utils.exceptions import ValidationError


@dataclass(frozen=True)
class SortInstruction:
    """Compiled sort: an allow-listed field and a direction."""

    field: str = SortFields.DEFAULT
    direction: str = SortDirection.DEFAULT

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC

    @property
    def token(self) -> str:
        return build_sort_token(self.field, self.direction)


def build_sort_token(sort_by: str | None = None, sort_order: str | None = None) -> str:
    """Compose sortBy/sortOrder request parameters into a token."""
    field = (sort_by or "").strip() or SortFields.DEFAULT
    direction = (sort_order or "").strip() or SortDirection.DEFAULT
    return f"{field}_{direction}"


def _invalid(token: Any, message: str) -> ValidationError:
    return ValidationError(
        ErrorMessages.INVALID_PARAMETERS,
        details=[{"field": "sort", "message": message, "value": token}],
    )


def compile_sort(token: str | None) -> SortInstruction:
    """
    Compile a sort token.

    An absent or blank token means created_at descending.

    Raises:
        ValidationError: Unknown field or direction, or malformed token.
    """
    if token is None:
        return SortInstruction()
    if not isinstance(token, str):
        raise _invalid(token, "must be a string of the form <field>_<direction>")

    normalized = token.strip().lower()
    if not normalized:
        return SortInstruction()

    field, sep, direction = normalized.rpartition("_")
    if not sep or not field:
        raise _invalid(token, "must be of the form <field>_<direction>")

    if field not in SortFields.ALL:
        raise _invalid(
            token, f"unknown sort field '{field}' (allowed: {', '.join(sorted(SortFields.ALL))})"
        )
    if direction not in SortDirection.ALL:
        raise _invalid(token, f"unknown sort direction '{direction}' (allowed: asc, desc)")

    return SortInstruction(field=field, direction=direction)
