"""Ordered fallback chains for article fields, as static data.

Each chain entry is ``(css_selector, attribute)``; ``attribute=None`` means the
element text. Site-specific entries are keyed by host suffix and are tried
before the generic chain of the same field.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

import yaml

FIELDS = ("title", "author", "date")


class Source(NamedTuple):
    selector: str
    attr: Optional[str] = None


TITLE_CHAIN: List[Source] = [
    Source('meta[property="og:title"]', "content"),
    Source('meta[name="twitter:title"]', "content"),
    Source("title"),
    Source("h1"),
]

AUTHOR_CHAIN: List[Source] = [
    Source('meta[name="author"]', "content"),
    Source('meta[property="article:author"]', "content"),
    Source(".author"),
    Source('[class*="author"]'),
]

DATE_CHAIN: List[Source] = [
    Source('meta[property="article:published_time"]', "content"),
    Source('meta[name="publish-date"]', "content"),
    Source('meta[name="date"]', "content"),
    Source("time", "datetime"),
    Source("time"),
    Source(".date"),
    Source('[class*="date"]'),
]

SOURCE_CHAIN: List[Source] = [
    Source('meta[property="og:site_name"]', "content"),
]

GENERIC_CHAINS: Dict[str, List[Source]] = {
    "title": TITLE_CHAIN,
    "author": AUTHOR_CHAIN,
    "date": DATE_CHAIN,
}

SITE_SELECTORS: Dict[str, Dict[str, List[Source]]] = {
    "cnn.com": {
        "title": [Source(".headline__text")],
        "author": [Source(".byline__name")],
        "date": [Source(".headline__sub-description")],
    },
}

# Body containers used when only the page text can be salvaged
BODY_SELECTOR = '[class*="article-body"], [class*="story-body"], article, section'


def _host_matches(host: str, key: str) -> bool:
    return host == key or host.endswith("." + key)


def site_sources(
    host: str, field: str, table: Optional[Dict[str, Dict[str, List[Source]]]] = None
) -> List[Source]:
    out: List[Source] = []
    for key, rules in (table if table is not None else SITE_SELECTORS).items():
        if _host_matches(host, key):
            out.extend(rules.get(field, []))
    return out


def chain_for(
    host: str, field: str, table: Optional[Dict[str, Dict[str, List[Source]]]] = None
) -> List[Source]:
    """Site-specific sources for ``host`` followed by the generic chain of ``field``."""
    return site_sources(host, field, table) + list(GENERIC_CHAINS[field])


def _parse_source(raw) -> Optional[Source]:
    if isinstance(raw, str) and raw.strip():
        return Source(raw.strip())
    if isinstance(raw, dict) and isinstance(raw.get("selector"), str):
        attr = raw.get("attr")
        return Source(raw["selector"].strip(), str(attr) if attr else None)
    return None


def load_selector_overrides(path: str | Path) -> Dict[str, Dict[str, List[Source]]]:
    """Read per-host overrides from YAML or JSON.

    Shape: ``{host: {title|author|date: [selector | {selector, attr}]}}``.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in (".yml", ".yaml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)

    out: Dict[str, Dict[str, List[Source]]] = {}
    for host, rules in (data or {}).items():
        if not isinstance(rules, dict):
            continue
        d: Dict[str, List[Source]] = {}
        for k in FIELDS:
            v = rules.get(k)
            if isinstance(v, list):
                parsed = [s for s in (_parse_source(x) for x in v) if s is not None]
                if parsed:
                    d[k] = parsed
        if d:
            out[str(host).lower()] = d
    return out


def merge_selectors(
    base: Dict[str, Dict[str, List[Source]]], overrides: Dict[str, Dict[str, List[Source]]]
) -> Dict[str, Dict[str, List[Source]]]:
    """Put override sources in front of the built-in ones for the same host."""
    out = {k: {kk: list(vv) for kk, vv in v.items()} for k, v in base.items()}
    for host, rules in overrides.items():
        if host not in out:
            out[host] = {k: list(v) for k, v in rules.items()}
            continue
        for key in FIELDS:
            if key in rules:
                existing = out[host].get(key, [])
                out[host][key] = list(rules[key]) + [x for x in existing if x not in rules[key]]
    return out
