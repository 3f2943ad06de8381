"""Heuristic path for an arbitrary target URL."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from newsscope.core.config import EngineConfig
from newsscope.core.errors import FetchFailure, InvalidUrl
from newsscope.core.models import UNKNOWN, ArticleRecord, Candidate
from newsscope.core.utils import hostname_of, now_iso
from newsscope.infra.logging import get_unified_logger, log_processing_step
from newsscope.scrape.classifier import PageKind, classify
from newsscope.scrape.discovery import discover
from newsscope.scrape.extractor import FieldExtractor, extract_article
from newsscope.scrape.http_client import FetchFn

SINGLE_ARTICLE_TITLE = "Single Article"

_log = get_unified_logger("scrape", "generic")


def error_record(url: str, error: Exception) -> ArticleRecord:
    return ArticleRecord(
        title=f"Error scraping {url}",
        link=url,
        author="System",
        publication_date=now_iso(),
        source="Error",
        error=str(error),
    )


def degraded_record(candidate: Candidate, site_name: str) -> ArticleRecord:
    return ArticleRecord(
        title=candidate.text,
        link=candidate.url,
        author=UNKNOWN,
        publication_date=UNKNOWN,
        source=site_name or UNKNOWN,
    )


class GenericSite:
    """Classify ``url`` then extract one article or a listing's candidates."""

    def __init__(
        self,
        url: str,
        config: Optional[EngineConfig] = None,
        extractor: Optional[FieldExtractor] = None,
    ) -> None:
        self.url = url
        self.config = config or EngineConfig()
        self.extractor = extractor or FieldExtractor(content_limit=self.config.content_limit)

    def collect(self, fetch: FetchFn) -> List[ArticleRecord]:
        try:
            kind = classify(self.url)
            site_name = hostname_of(self.url)
            if kind is PageKind.ARTICLE:
                extraction = extract_article(
                    self.url, SINGLE_ARTICLE_TITLE, site_name, fetch,
                    self.config.article_timeout, self.extractor,
                )
                return [extraction.record]
            html = fetch(self.url, self.config.listing_timeout)
        except (InvalidUrl, FetchFailure) as e:
            _log.warning("giving up on %s: %s", self.url, e)
            return [error_record(self.url, e)]

        parsed = urlparse(self.url)
        candidates = discover(
            BeautifulSoup(html, "html.parser"),
            f"{parsed.scheme}://{parsed.netloc}",
            limit=self.config.max_candidates,
            raw_cap=self.config.raw_candidate_cap,
            dedup_key=self.config.dedup_key,
        )
        log_processing_step("scrape", "generic", "candidates discovered", {"url": self.url, "count": len(candidates)})
        return self._extract_all(candidates, site_name, fetch)

    def _extract_one(self, candidate: Candidate, site_name: str, fetch: FetchFn) -> ArticleRecord:
        try:
            extraction = extract_article(
                candidate.url, candidate.text, site_name, fetch,
                self.config.article_timeout, self.extractor,
            )
        except FetchFailure as e:
            _log.info("falling back to anchor text for %s: %s", candidate.url, e)
            return degraded_record(candidate, site_name)
        return extraction.record

    def _extract_all(self, candidates: List[Candidate], site_name: str, fetch: FetchFn) -> List[ArticleRecord]:
        if not candidates:
            return []
        workers = max(1, min(self.config.max_workers, len(candidates)))
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futs = [ex.submit(self._extract_one, c, site_name, fetch) for c in candidates]
            # Reassemble in discovery order
            return [f.result() for f in futs]
