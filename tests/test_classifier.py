from __future__ import annotations

import pytest

from newsscope.core.errors import InvalidUrl
from newsscope.scrape.classifier import PageKind, classify


@pytest.mark.parametrize(
    "url",
    [
        "https://site.com/2024/05/01/story",
        "https://www.bbc.com/news/articles/c123abc",
        "https://example.com/Politics/some-headline",
        "https://example.com/tech/gadget-review",
        "https://example.com/a/b/news/x",
    ],
)
def test_article_like_paths(url):
    assert classify(url) is PageKind.ARTICLE


@pytest.mark.parametrize(
    "url",
    [
        "https://site.com/section/tech",
        "https://example.com/",
        "https://example.com",
        "https://example.com/world",
        "https://example.com/1999/05/01/old",
    ],
)
def test_listing_like_paths(url):
    assert classify(url) is PageKind.LISTING


def test_query_string_is_ignored():
    assert classify("https://example.com/home?next=/news/") is PageKind.LISTING


@pytest.mark.parametrize("url", ["", "not a url", "ftp://example.com/news/x", "https:///news/x"])
def test_malformed_urls_raise(url):
    with pytest.raises(InvalidUrl):
        classify(url)


def test_classify_is_pure():
    url = "https://site.com/2024/05/01/story"
    assert classify(url) == classify(url)
