"""
Shared validators for input sanitization and security.
"""

import re
import unicodedata
from urllib.parse import urlparse
from typing import Optional

from shared.config.constants import Limits

# Blocked internal domains/IPs that should never be in image URLs (SSRF prevention)
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "172.16.",
    "172.17.",
    "172.18.",
    "172.19.",
    "172.20.",
    "172.21.",
    "172.22.",
    "172.23.",
    "172.24.",
    "172.25.",
    "172.26.",
    "172.27.",
    "172.28.",
    "172.29.",
    "172.30.",
    "172.31.",
    "192.168.",
    "169.254.",  # Link-local
    "[::1]",
    "metadata.google",  # GCP metadata
]

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate and sanitize an image URL.

    Returns the stripped URL, or None for empty input.

    Raises:
        ValueError: If the URL is invalid or points at an internal host
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")

    if scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS URLs are allowed")

    host = parsed.netloc.lower()
    if not host:
        raise ValueError("URL has no valid host")

    for blocked in BLOCKED_HOSTS:
        if blocked in host:
            raise ValueError("Internal URLs are not allowed")

    if len(url) > Limits.MAX_URL_LENGTH:
        raise ValueError(f"URL too long (max {Limits.MAX_URL_LENGTH} characters)")

    return url


def sanitize_search_term(term: str, max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """
    Sanitize a search term: trim and drop control characters.

    Raises:
        ValueError: If the trimmed term is longer than max_length.
    """
    if not term:
        return ""

    term = term.strip()

    if len(term) > max_length:
        raise ValueError(f"Search term too long (max {max_length} characters)")

    # Remove null bytes and other control characters
    term = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)

    return term


def slugify(text: str) -> str:
    """
    Build a URL slug: "Crème Brûlée!" -> "creme-brulee".

    Accents are stripped, anything that is not a letter or digit
    becomes a single hyphen.
    """
    normalized = unicodedata.normalize("NFKD", text or "")
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text).strip("-")
    return slug or "item"
