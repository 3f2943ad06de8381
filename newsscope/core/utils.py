from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def clean_text(value: Optional[str]) -> str:
    """Strip surrounding whitespace; ``None`` becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def truncate(text: str, limit: int, marker: str = "...") -> str:
    return text[:limit] + marker


def hostname_of(url: str) -> str:
    return (urlparse(url).hostname or "").lower()
