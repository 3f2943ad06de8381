"""Aggregation entry point: pick the path, merge, filter and order records."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from dateutil import parser as dateparser

from newsscope.core.config import EngineConfig
from newsscope.core.models import ArticleRecord
from newsscope.infra.logging import log_task_end, log_task_start
from newsscope.scrape.adapters import SiteAdapter, default_adapters
from newsscope.scrape.extractor import FieldExtractor
from newsscope.scrape.generic import GenericSite
from newsscope.scrape.http_client import FetchFn, HttpFetcher
from newsscope.scrape.selectors import SITE_SELECTORS, load_selector_overrides, merge_selectors

SORT_DEFAULT = "default"
SORT_DATE = "date"
SORT_RELEVANCE = "relevance"


def parse_date(value: str) -> Optional[datetime]:
    """Parse a publication date string; ``None`` when it is not a date."""
    if not value or not value.strip():
        return None
    try:
        dt = dateparser.parse(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        # out-of-range offsets only fail once utcoffset() is evaluated
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def filter_articles(articles: Sequence[ArticleRecord], keyword: str) -> List[ArticleRecord]:
    """Keep records whose title, author or source contains ``keyword`` (case-insensitive)."""
    if not keyword:
        return list(articles)
    kw = keyword.lower()
    return [
        a
        for a in articles
        if kw in a.title.lower() or kw in a.author.lower() or kw in a.source.lower()
    ]


def sort_articles(articles: Sequence[ArticleRecord], sort_by: str, keyword: str = "") -> List[ArticleRecord]:
    if sort_by == SORT_DATE:
        dated = [(parse_date(a.publication_date), a) for a in articles]
        valid = [(d, a) for d, a in dated if d is not None]
        valid.sort(key=lambda p: p[0], reverse=True)
        return [a for _, a in valid] + [a for d, a in dated if d is None]
    if sort_by == SORT_RELEVANCE and keyword:
        kw = keyword.lower()
        hits = [a for a in articles if kw in a.title.lower()]
        rest = [a for a in articles if kw not in a.title.lower()]
        return hits + rest
    return list(articles)


class NewsAggregator:
    """Runs either the built-in adapters or the generic path for one target URL.

    ``fetch`` is the network seam; tests pass an in-memory fake. Each call to
    :meth:`run` is independent of the previous ones.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        fetch: Optional[FetchFn] = None,
        adapters: Optional[List[SiteAdapter]] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.fetch: FetchFn = fetch or HttpFetcher(self.config.user_agent)
        self.adapters = adapters if adapters is not None else default_adapters(self.config)
        table = SITE_SELECTORS
        if self.config.selectors_file:
            table = merge_selectors(table, load_selector_overrides(self.config.selectors_file))
        self.extractor = FieldExtractor(table, content_limit=self.config.content_limit)

    def _collect_adapters(self) -> List[ArticleRecord]:
        if not self.adapters:
            return []
        with ThreadPoolExecutor(max_workers=len(self.adapters)) as ex:
            futs = [ex.submit(a.collect, self.fetch) for a in self.adapters]
            merged: List[ArticleRecord] = []
            for f in futs:
                merged.extend(f.result())
        return merged

    def run(self, target_url: str = "", keyword: str = "", sort_by: str = SORT_DEFAULT) -> List[ArticleRecord]:
        log_task_start("scrape", "run", {"url": target_url, "keyword": keyword, "sortBy": sort_by})
        if target_url:
            articles = GenericSite(target_url, self.config, self.extractor).collect(self.fetch)
        else:
            articles = self._collect_adapters()
        collected = len(articles)
        articles = filter_articles(articles, keyword)
        articles = sort_articles(articles, sort_by, keyword)
        log_task_end("scrape", "run", True, {"collected": collected, "returned": len(articles)})
        return articles


def run(
    target_url: str = "",
    keyword: str = "",
    sort_by: str = SORT_DEFAULT,
    fetch: Optional[FetchFn] = None,
    config: Optional[EngineConfig] = None,
) -> List[ArticleRecord]:
    return NewsAggregator(config, fetch).run(target_url, keyword, sort_by)
