"""
HTTP client for the headless CMS query API.

Documents are fetched with GROQ queries through
``GET {base_url}/data/query/{dataset}?query=...``; the API answers
``{"result": ...}``.

Usage:
    from store_api.services.content import CMSClient

    with CMSClient.from_settings() as cms:
        home = cms.fetch_first("home")
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from shared.config.logging import content_logger as logger
from shared.config.settings import settings
from shared.utils.exceptions import ExternalServiceError

SERVICE_NAME = "CMS"


class CMSClient:
    """
    Synchronous CMS client.

    One httpx.Client per instance; close() (or the context manager)
    releases its connections.
    """

    def __init__(
        self,
        base_url: str,
        dataset: str,
        token: str | None = None,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.dataset = dataset
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=self.base_url or "http://cms.invalid",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, transport: httpx.BaseTransport | None = None) -> "CMSClient":
        return cls(
            base_url=settings.cms_base_url,
            dataset=settings.cms_dataset,
            token=settings.cms_token or None,
            timeout=settings.cms_timeout_seconds,
            transport=transport,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    def __enter__(self) -> "CMSClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # =========================================================================
    # Queries
    # =========================================================================

    def query(self, groq: str, params: dict[str, Any] | None = None) -> Any:
        """
        Run a GROQ query and return its ``result``.

        Raises:
            ExternalServiceError: 503 when the CMS is not configured or
                unreachable, 502 on an error status or malformed body.
        """
        if not self.is_configured:
            raise ExternalServiceError(SERVICE_NAME, is_unavailable=True, reason="not configured")

        query_params = {"query": groq}
        for name, value in (params or {}).items():
            # GROQ parameters are passed as $name=<json>
            query_params[f"${name}"] = json.dumps(value)

        try:
            response = self._client.get(f"/data/query/{self.dataset}", params=query_params)
            response.raise_for_status()
            body = response.json()
        except httpx.TransportError as e:
            raise ExternalServiceError(SERVICE_NAME, is_unavailable=True, error=str(e))
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(SERVICE_NAME, status=e.response.status_code)
        except ValueError as e:
            raise ExternalServiceError(SERVICE_NAME, error=f"invalid JSON: {e}")

        if not isinstance(body, dict) or "result" not in body:
            raise ExternalServiceError(SERVICE_NAME, error="response has no result")

        logger.debug("CMS query", dataset=self.dataset, ms=body.get("ms"))
        return body["result"]

    def fetch_all(self, doc_type: str) -> list[dict[str, Any]]:
        """Every document of a type."""
        result = self.query("*[_type == $type]", {"type": doc_type})
        return result if isinstance(result, list) else []

    def fetch_first(self, doc_type: str) -> dict[str, Any] | None:
        """First document of a type, or None."""
        result = self.query("*[_type == $type][0]", {"type": doc_type})
        return result if isinstance(result, dict) else None

    def fetch_by_id(self, doc_type: str, doc_id: str) -> dict[str, Any] | None:
        result = self.query("*[_type == $type && _id == $id][0]", {"type": doc_type, "id": doc_id})
        return result if isinstance(result, dict) else None
