from __future__ import annotations


class NewsScopeError(Exception):
    """Base class for engine errors."""


class InvalidUrl(NewsScopeError, ValueError):
    def __init__(self, url: str, reason: str = "malformed url") -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class FetchFailure(NewsScopeError):
    """Network error, non-2xx status or timeout while fetching ``url``."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"GET {url} failed: {reason}")
