"""HTTP fetching for listing and article pages."""
from __future__ import annotations

from typing import Callable, Dict

import requests

from newsscope.core.config import DEFAULT_USER_AGENT
from newsscope.core.errors import FetchFailure

# (url, timeout_seconds) -> html text; raises FetchFailure
FetchFn = Callable[[str, float], str]


class HttpFetcher:
    """Single-shot GET with a timeout and a browser-like User-Agent.

    No retries and no pooled session: each call stands alone.
    """

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.headers: Dict[str, str] = {"User-Agent": user_agent}

    def __call__(self, url: str, timeout: float) -> str:
        try:
            r = requests.get(url, headers=self.headers, timeout=timeout)
            r.raise_for_status()
        except requests.Timeout as e:
            raise FetchFailure(url, f"timed out after {timeout:g}s") from e
        except requests.RequestException as e:
            raise FetchFailure(url, str(e)) from e
        r.encoding = r.apparent_encoding or r.encoding or "utf-8"
        return r.text
