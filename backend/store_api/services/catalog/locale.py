"""
Locale resolution for multilingual values.

A multilingual value is either a single string or a {locale: text} map.
Both shapes are modelled as a tagged variant (Single | Localized) and
rendered to one display string by resolve_multilingual():

    requested locale -> "fr" -> "en" -> first value -> ""

Usage:
    from store_api.services.catalog.locale import resolve_multilingual

    resolve_multilingual({"fr": "Bonjour", "en": "Hello"}, "en")  # "Hello"
    resolve_multilingual({"fr": "Bonjour"}, "de")                 # "Bonjour"
    resolve_multilingual(None, "fr")                              # ""
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from shared.config.constants import Locales


@dataclass(frozen=True)
class Single:
    """Value stored without locale variants."""

    text: str


@dataclass(frozen=True)
class Localized:
    """Value stored per locale. Entries keep their original order."""

    entries: tuple[tuple[str, str], ...]

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Localized":
        return cls(tuple((str(k), v) for k, v in values.items() if isinstance(v, str)))

    def get(self, locale: str) -> str | None:
        for code, text in self.entries:
            if code == locale:
                return text
        return None

    def to_dict(self) -> dict[str, str]:
        return dict(self.entries)


MultilingualValue = Union[Single, Localized]


def as_multilingual(raw: Any) -> MultilingualValue | None:
    """
    Wrap a stored value (str, dict or already-tagged) into the variant.

    Anything that is neither a string nor a mapping is treated as absent.
    """
    if raw is None:
        return None
    if isinstance(raw, (Single, Localized)):
        return raw
    if isinstance(raw, str):
        return Single(raw)
    if isinstance(raw, Mapping):
        return Localized.from_mapping(raw)
    return None


def to_storage(value: MultilingualValue | None) -> str | dict[str, str] | None:
    """Inverse of as_multilingual, for JSON columns and API output."""
    if value is None:
        return None
    if isinstance(value, Single):
        return value.text
    return value.to_dict()


def resolve_multilingual(value: Any, current_locale: str | None) -> str:
    """
    Resolve a multilingual value to a single display string.

    Never raises: unknown shapes resolve to "".
    """
    if not value:
        return ""

    value = as_multilingual(value)
    if value is None:
        return ""
    if isinstance(value, Single):
        return value.text

    for code in (current_locale, *Locales.FALLBACK_CHAIN):
        if not code:
            continue
        text = value.get(code)
        if text:
            return text

    if value.entries:
        return value.entries[0][1] or ""
    return ""


def variants(value: Any) -> list[str]:
    """All non-empty texts of a value, used for search across locales."""
    value = as_multilingual(value)
    if value is None:
        return []
    if isinstance(value, Single):
        return [value.text] if value.text else []
    return [text for _, text in value.entries if text]


def is_locale_map(value: Any) -> bool:
    """True for a non-empty mapping whose keys are all known locale codes."""
    if not isinstance(value, Mapping) or not value:
        return False
    return all(
        isinstance(k, str) and k in Locales.SUPPORTED and (v is None or isinstance(v, str))
        for k, v in value.items()
    )


def localize_document(doc: Any, locale: str | None) -> Any:
    """
    Walk a CMS document and resolve every locale map to a string.

    Dicts and lists are rebuilt, other values are returned unchanged.
    Keys starting with "_" (CMS metadata such as _id, _type) are kept as-is.
    """
    if is_locale_map(doc):
        return resolve_multilingual(doc, locale)
    if isinstance(doc, Mapping):
        return {
            key: value if key.startswith("_") else localize_document(value, locale)
            for key, value in doc.items()
        }
    if isinstance(doc, list):
        return [localize_document(item, locale) for item in doc]
    return doc
