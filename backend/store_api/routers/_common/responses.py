"""
Success envelopes: ``{"success": true, "data": ...}``.

FastAPI encodes the envelope with jsonable_encoder, so pydantic models
inside it come out with their camelCase aliases.
"""

from typing import Any

_NO_DATA = object()


def ok(data: Any = _NO_DATA, message: str | None = None, **extra: Any) -> dict[str, Any]:
    """Envelope for data (None is kept as null), an optional message and extra keys."""
    body: dict[str, Any] = {"success": True}
    if data is not _NO_DATA:
        body["data"] = data
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body
