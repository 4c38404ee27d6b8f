"""
CORS for the storefront and back-office front ends.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings
from shared.infrastructure.correlation import REQUEST_ID_HEADER

# Next.js and Vite dev servers
DEV_PORTS = (3000, 5173)
DEV_ORIGINS = [f"http://{host}:{port}" for host in ("localhost", "127.0.0.1") for port in DEV_PORTS]

ALLOWED_HEADERS = ["Authorization", "Content-Type", "Accept", "Accept-Language", REQUEST_ID_HEADER]


def cors_origins() -> list[str]:
    """ALLOWED_ORIGINS (comma-separated) when set, else the dev servers."""
    configured = [o.strip().rstrip("/") for o in settings.allowed_origins.split(",")]
    return [o for o in configured if o] or DEV_ORIGINS


def configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=ALLOWED_HEADERS,
        expose_headers=[REQUEST_ID_HEADER, "Retry-After"],
        # Browsers re-check preflights immediately while developing
        max_age=0 if settings.environment == "development" else 600,
    )
