"""Decide from the path alone whether a URL points at one article or a listing."""
from __future__ import annotations

import enum
import re
from urllib.parse import urlparse

from newsscope.core.errors import InvalidUrl

_DATED_PATH = re.compile(r"/20\d{2}/\d{2}/\d{2}/")
_SECTION_WORDS = re.compile(r"/(news|story|article|post|politics|tech|business)/", re.IGNORECASE)


class PageKind(str, enum.Enum):
    ARTICLE = "article"
    LISTING = "listing"


def validate_url(url: str) -> str:
    """Return ``url`` unchanged or raise :class:`InvalidUrl`."""
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrl(str(url), "empty url")
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrl(url, str(e)) from e
    if parsed.scheme.lower() not in ("http", "https"):
        raise InvalidUrl(url, "unsupported scheme")
    if not parsed.hostname:
        raise InvalidUrl(url, "missing host")
    return url


def classify(url: str) -> PageKind:
    path = urlparse(validate_url(url)).path
    if "/articles/" in path or _DATED_PATH.search(path) or _SECTION_WORDS.search(path):
        return PageKind.ARTICLE
    return PageKind.LISTING
