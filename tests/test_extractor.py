from __future__ import annotations

import pytest

from newsscope.core.errors import FetchFailure
from newsscope.scrape.extractor import FieldExtractor, extract_article
from newsscope.scrape.selectors import SITE_SELECTORS, Source

URL = "https://example.com/news/story-1"

FULL_PAGE = """
<html><head>
  <title>Page title</title>
  <meta property="og:title" content="  OG headline  ">
  <meta name="author" content="Jane Doe">
  <meta property="article:published_time" content="2024-05-01T10:00:00Z">
  <meta property="og:site_name" content="Example Times">
</head><body><h1>H1 headline</h1></body></html>
"""


def _extract(html: str, url: str = URL, fallback: str = "Anchor text", site: str = "example.com"):
    return FieldExtractor().extract(html, url, fallback, site)


def test_meta_tags_win_and_values_are_trimmed():
    ex = _extract(FULL_PAGE)
    assert ex.complete
    r = ex.record
    assert r.title == "OG headline"
    assert r.author == "Jane Doe"
    assert r.publication_date == "2024-05-01T10:00:00Z"
    assert r.source == "Example Times"
    assert r.link == URL
    assert r.content is None and r.error is None


@pytest.mark.parametrize(
    "html,expected",
    [
        ('<meta name="twitter:title" content="Tweet title"><title>T</title>', "Tweet title"),
        ("<title>Doc title</title><h1>H1</h1>", "Doc title"),
        ("<h1>First</h1><h1>Second</h1>", "First"),
        ("<p>nothing</p>", "Anchor text"),
    ],
)
def test_title_chain(html, expected):
    assert _extract(html).record.title == expected


def test_title_sentinel_without_fallback():
    assert _extract("<p>x</p>", fallback="").record.title == "No title"


@pytest.mark.parametrize(
    "html,expected",
    [
        ('<meta property="article:author" content="Meta Author">', "Meta Author"),
        ('<span class="author"> Plain Author </span>', "Plain Author"),
        ('<div class="post-author-name">Partial Match</div>', "Partial Match"),
        ("<p>none</p>", "Unknown"),
    ],
)
def test_author_chain(html, expected):
    assert _extract(html).record.author == expected


@pytest.mark.parametrize(
    "html,expected",
    [
        ('<meta name="publish-date" content="2024-01-02">', "2024-01-02"),
        ('<meta name="date" content="2024-01-03">', "2024-01-03"),
        ('<time datetime="2024-01-04T00:00:00Z">Jan 4</time>', "2024-01-04T00:00:00Z"),
        ("<time>January 5, 2024</time>", "January 5, 2024"),
        ('<span class="date">2024-01-06</span>', "2024-01-06"),
        ('<span class="updated-date-label">2024-01-07</span>', "2024-01-07"),
        ("<p>none</p>", "Unknown"),
    ],
)
def test_date_chain(html, expected):
    assert _extract(html).record.publication_date == expected


def test_blank_values_fall_through():
    html = '<meta property="og:title" content="   "><title>Real title</title>'
    assert _extract(html).record.title == "Real title"


def test_source_falls_back_to_site_name_then_unknown():
    assert _extract("<p>x</p>").record.source == "example.com"
    assert _extract("<p>x</p>", site="").record.source == "Unknown"


def test_site_specific_selectors_only_for_their_host():
    html = (
        '<h1 class="headline__text"> CNN headline </h1>'
        '<span class="byline__name">CNN Writer</span>'
        '<div class="headline__sub-description">Updated 2024-05-01</div>'
        '<meta property="og:title" content="OG">'
    )
    cnn = _extract(html, url="https://edition.cnn.com/2024/05/01/world/x").record
    assert cnn.title == "CNN headline"
    assert cnn.author == "CNN Writer"
    assert cnn.publication_date == "Updated 2024-05-01"
    other = _extract(html).record
    assert other.title == "OG"


def test_broken_selector_recovers_with_truncated_content():
    table = {"example.com": {"title": [Source("a[")]}}
    body = "word " * 1000
    html = f"<article>{body}</article>"
    ex = FieldExtractor(table, content_limit=50).extract(html, URL, "Anchor text", "example.com")
    assert not ex.complete
    r = ex.record
    assert r.title == "Anchor text"
    assert r.author == "Unknown" and r.publication_date == "Unknown"
    assert r.source == "example.com"
    assert r.content.endswith("...")
    assert len(r.content) == 53


def test_extract_article_passes_article_timeout(fake_fetch):
    fetch = fake_fetch({URL: FULL_PAGE})
    ex = extract_article(URL, "fallback", "example.com", fetch, 5.0)
    assert ex.record.title == "OG headline"
    assert fetch.calls == [(URL, 5.0)]


def test_extract_article_propagates_fetch_failure(fake_fetch):
    with pytest.raises(FetchFailure):
        extract_article(URL, "fallback", "example.com", fake_fetch({}), 5.0)


def test_builtin_site_table_has_cnn():
    assert "cnn.com" in SITE_SELECTORS


def test_unexpected_errors_are_not_turned_into_recovery(monkeypatch):
    from newsscope.scrape import extractor as ex_mod

    def broken(*_a, **_k):
        raise RuntimeError("bug in chain lookup")

    monkeypatch.setattr(ex_mod, "chain_for", broken)
    with pytest.raises(RuntimeError):
        _extract(FULL_PAGE)
