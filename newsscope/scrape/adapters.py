"""Hand-tuned pipelines for the built-in publishers.

Each adapter fetches its own listing page, picks links with one publisher
selector and reads mostly meta tags from each article. Article pages are
fetched one after another. Failures stay inside the adapter: a failed
article is logged and left out, a failed listing yields no records.
"""
from __future__ import annotations

from typing import List, Optional, Type
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from newsscope.core.config import EngineConfig
from newsscope.core.errors import FetchFailure
from newsscope.core.models import NO_TITLE, UNKNOWN, ArticleRecord
from newsscope.core.utils import clean_text, hostname_of
from newsscope.infra.logging import get_unified_logger, log_error, mdc_put, mdc_remove
from newsscope.scrape.extractor import first_value
from newsscope.scrape.http_client import FetchFn
from newsscope.scrape.selectors import Source

_log = get_unified_logger("scrape", "adapter")

OG_TITLE = Source('meta[property="og:title"]', "content")
OG_SITE_NAME = Source('meta[property="og:site_name"]', "content")
PUBLISHED_TIME = Source('meta[property="article:published_time"]', "content")
META_AUTHOR = Source('meta[name="author"]', "content")


class SiteAdapter:
    name: str = ""
    listing_url: str = ""
    base_url: str = ""
    link_selector: str = ""
    author_sources: List[Source] = [META_AUTHOR]
    default_author: str = UNKNOWN
    default_source: str = UNKNOWN

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()

    def keep_href(self, href: str) -> bool:
        return True

    def article_links(self, soup: BeautifulSoup) -> List[str]:
        """Unique absolute article urls from the listing, capped at ``adapter_max_links``."""
        links: List[str] = []
        for el in soup.select(self.link_selector):
            if len(links) >= self.config.adapter_max_links:
                break
            href = el.get("href")
            if not href or not self.keep_href(href):
                continue
            full = href if href.startswith("http") else f"{self.base_url}{href}"
            if full not in links:
                links.append(full)
        return links

    def build_record(self, soup: BeautifulSoup, link: str) -> ArticleRecord:
        return ArticleRecord(
            title=first_value(soup, [OG_TITLE]) or NO_TITLE,
            link=link,
            author=first_value(soup, self.author_sources) or self.default_author,
            publication_date=first_value(soup, [PUBLISHED_TIME]) or UNKNOWN,
            source=first_value(soup, [OG_SITE_NAME]) or self.default_source,
        )

    def fetch_listing(self, fetch: FetchFn) -> Optional[BeautifulSoup]:
        try:
            html = fetch(self.listing_url, self.config.listing_timeout)
        except FetchFailure as e:
            log_error("scrape", "adapter", e, f"{self.name} listing")
            return None
        return BeautifulSoup(html, "html.parser")

    def scrape(self, soup: BeautifulSoup, fetch: FetchFn) -> List[ArticleRecord]:
        records: List[ArticleRecord] = []
        for link in self.article_links(soup):
            try:
                html = fetch(link, self.config.article_timeout)
            except FetchFailure as e:
                log_error("scrape", "adapter", e, f"{self.name} error: {link}")
                continue
            records.append(self.build_record(BeautifulSoup(html, "html.parser"), link))
        return records

    def collect(self, fetch: FetchFn) -> List[ArticleRecord]:
        mdc_put("site", self.name)
        try:
            soup = self.fetch_listing(fetch)
            if soup is None:
                return []
            records = self.scrape(soup, fetch)
            _log.info("%s: %d articles", self.name, len(records))
            return records
        finally:
            mdc_remove("site")


class BBCAdapter(SiteAdapter):
    name = "BBC News"
    listing_url = "https://www.bbc.com/news"
    base_url = "https://www.bbc.com"
    link_selector = "a.gs-c-promo-heading"
    author_sources = [Source('meta[name="byl"]', "content")]
    default_author = "BBC News"
    default_source = "BBC News"

    def keep_href(self, href: str) -> bool:
        return "/live/" not in href and "#" not in href


class VergeAdapter(SiteAdapter):
    name = "The Verge"
    listing_url = "https://www.theverge.com/"
    base_url = "https://www.theverge.com"
    link_selector = 'a[data-analytics-link="article"]'
    default_source = "The Verge"


class CNNAdapter(SiteAdapter):
    name = "CNN"
    listing_url = "https://edition.cnn.com/"
    base_url = "https://edition.cnn.com"
    link_selector = 'a[href^="/202"]'
    default_author = "CNN"
    default_source = "CNN"


class HackerNewsAdapter(SiteAdapter):
    """Reads everything from the front page rows; no per-article fetches."""

    name = "Hacker News"
    listing_url = "https://news.ycombinator.com/"
    base_url = "https://news.ycombinator.com"
    max_items = 5

    def scrape(self, soup: BeautifulSoup, fetch: FetchFn) -> List[ArticleRecord]:
        records: List[ArticleRecord] = []
        for row in soup.select(".athing"):
            anchor = row.select_one(".titleline > a") or row.select_one(".titleline a")
            href = anchor.get("href") if anchor else None
            if not href:
                continue
            link = urljoin(self.listing_url, href)
            subtext = None
            sibling = row.find_next_sibling("tr")
            if sibling is not None:
                subtext = sibling.select_one(".subtext")
            author = age = ""
            if subtext is not None:
                author = first_value(subtext, [Source(".hnuser")])
                age = first_value(subtext, [Source(".age")])
            records.append(
                ArticleRecord(
                    title=clean_text(anchor.get_text()) or NO_TITLE,
                    link=link,
                    author=author or UNKNOWN,
                    publication_date=age or UNKNOWN,
                    source=hostname_of(link) or UNKNOWN,
                )
            )
        return records[: self.max_items]


# Fixed aggregation order
ADAPTERS: List[Type[SiteAdapter]] = [BBCAdapter, VergeAdapter, CNNAdapter, HackerNewsAdapter]


def default_adapters(config: Optional[EngineConfig] = None) -> List[SiteAdapter]:
    return [cls(config) for cls in ADAPTERS]

