"""Field extraction for a single article page."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from newsscope.core.models import NO_TITLE, UNKNOWN, ArticleRecord, Extraction
from newsscope.core.utils import clean_text, hostname_of, truncate
from newsscope.infra.logging import get_unified_logger
from newsscope.scrape.http_client import FetchFn
from newsscope.scrape.selectors import (
    BODY_SELECTOR,
    SITE_SELECTORS,
    SOURCE_CHAIN,
    Source,
    chain_for,
)

_log = get_unified_logger("scrape", "extract")


def first_value(soup: BeautifulSoup, sources: Iterable[Source]) -> str:
    """Return the first non-blank value produced by ``sources``, or ``""``."""
    for src in sources:
        el = soup.select_one(src.selector)
        if el is None:
            continue
        raw = el.get(src.attr) if src.attr else el.get_text()
        if isinstance(raw, list):
            raw = " ".join(raw)
        value = clean_text(raw)
        if value:
            return value
    return ""


def body_text(soup: BeautifulSoup) -> str:
    text = " ".join(el.get_text() for el in soup.select(BODY_SELECTOR)).strip()
    if text:
        return text
    return " ".join(p.get_text() for p in soup.find_all("p")).strip()


class FieldExtractor:
    def __init__(
        self,
        site_table: Optional[Dict[str, Dict[str, List[Source]]]] = None,
        content_limit: int = 2000,
    ) -> None:
        self.site_table = site_table if site_table is not None else SITE_SELECTORS
        self.content_limit = content_limit

    def fields(self, soup: BeautifulSoup, host: str, fallback_title: str, site_name: str) -> Dict[str, str]:
        return {
            "title": first_value(soup, chain_for(host, "title", self.site_table))
            or clean_text(fallback_title)
            or NO_TITLE,
            "author": first_value(soup, chain_for(host, "author", self.site_table)) or UNKNOWN,
            "publication_date": first_value(soup, chain_for(host, "date", self.site_table)) or UNKNOWN,
            "source": first_value(soup, SOURCE_CHAIN) or clean_text(site_name) or UNKNOWN,
        }

    def extract(self, html: str, url: str, fallback_title: str, site_name: str) -> Extraction:
        soup = BeautifulSoup(html, "html.parser")
        try:
            values = self.fields(soup, hostname_of(url), fallback_title, site_name)
        except (SelectorSyntaxError, ValueError) as e:
            # Keep what the page text offers instead of dropping the article
            _log.warning("field extraction failed for %s: %s", url, e)
            record = ArticleRecord(
                title=clean_text(fallback_title) or NO_TITLE,
                link=url,
                author=UNKNOWN,
                publication_date=UNKNOWN,
                source=clean_text(site_name) or UNKNOWN,
                content=truncate(body_text(soup), self.content_limit),
            )
            return Extraction(record, complete=False)
        return Extraction(ArticleRecord(link=url, **values))


def extract_article(
    url: str,
    fallback_title: str,
    site_name: str,
    fetch: FetchFn,
    timeout: float,
    extractor: Optional[FieldExtractor] = None,
) -> Extraction:
    """Fetch ``url`` and extract it. :class:`FetchFailure` propagates to the caller."""
    html = fetch(url, timeout)
    return (extractor or FieldExtractor()).extract(html, url, fallback_title, site_name)
