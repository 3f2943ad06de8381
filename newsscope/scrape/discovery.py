"""Candidate article links on a listing page."""
from __future__ import annotations

from typing import List, Set, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from newsscope.core.models import Candidate

LINK_SELECTORS: List[str] = [
    'a[href*="/article"]',
    'a[href*="/news"]',
    'a[href*="/story"]',
    'a[href*="/202"]',
    "article a",
    "h2 a",
    "h3 a",
    ".headline a",
]

MIN_ANCHOR_CHARS = 10
_BLOCKED_HREF_PARTS = ("tag", "mailto")


def resolve_href(href: str, base_url: str) -> str:
    if href.startswith("http"):
        return href
    return urljoin(base_url, href)


def _keep(href: str, text: str) -> bool:
    return len(text) > MIN_ANCHOR_CHARS and not any(p in href for p in _BLOCKED_HREF_PARTS)


def discover(
    soup: BeautifulSoup,
    base_url: str,
    limit: int = 8,
    raw_cap: int = 10,
    dedup_key: str = "pair",
) -> List[Candidate]:
    """Walk ``LINK_SELECTORS`` in order and collect (absolute url, anchor text) pairs.

    Collection stops growing once ``raw_cap`` distinct entries are held; the
    result is then trimmed to ``limit``. With ``dedup_key="pair"`` the same url
    under two different anchor texts yields two candidates.
    """
    seen: Set[Tuple[str, ...]] = set()
    found: List[Candidate] = []
    for selector in LINK_SELECTORS:
        for el in soup.select(selector):
            if len(found) >= raw_cap:
                break
            href = el.get("href")
            if not href:
                continue
            text = el.get_text().strip()
            if not _keep(href, text):
                continue
            cand = Candidate(resolve_href(href, base_url), text)
            key = (cand.url,) if dedup_key == "url" else (cand.url, cand.text)
            if key in seen:
                continue
            seen.add(key)
            found.append(cand)
    return found[:limit]
