from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEFAULT_LISTING_TIMEOUT = 10.0
DEFAULT_ARTICLE_TIMEOUT = 5.0
DEFAULT_USER_AGENT = "Mozilla/5.0"

_ENV_KEYS = {
    "NEWSSCOPE_LISTING_TIMEOUT": "listing_timeout",
    "NEWSSCOPE_ARTICLE_TIMEOUT": "article_timeout",
    "NEWSSCOPE_USER_AGENT": "user_agent",
    "NEWSSCOPE_SELECTORS_FILE": "selectors_file",
    "NEWSSCOPE_DEDUP_KEY": "dedup_key",
}


def load_config_file(path: Optional[str | Path]) -> Dict[str, Any]:
    """Load a YAML or JSON config file into a dict; a missing file yields ``{}``."""
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}

    with p.open("r", encoding="utf-8") as f:
        if p.suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config root must be a mapping: {p}")
    return data


def load_env() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for env_name, key in _ENV_KEYS.items():
        v = os.getenv(env_name)
        if v is not None and v.strip():
            out[key] = v.strip()
    return out


def merge_config(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge config layers left to right; later layers win, ``None`` values are skipped."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        for k, v in (layer or {}).items():
            if v is not None:
                merged[k] = v
    return merged


@dataclass
class EngineConfig:
    listing_timeout: float = DEFAULT_LISTING_TIMEOUT
    article_timeout: float = DEFAULT_ARTICLE_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    # discovery bounds
    max_candidates: int = 8
    raw_candidate_cap: int = 10
    # "pair" keeps (url, anchor text) pairs distinct; "url" collapses by url
    dedup_key: str = "pair"
    adapter_max_links: int = 5
    content_limit: int = 2000
    max_workers: int = 8
    selectors_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.dedup_key not in ("pair", "url"):
            raise ValueError(f"dedup_key must be 'pair' or 'url', got {self.dedup_key!r}")

    @classmethod
    def from_mapping(cls, conf: Mapping[str, Any]) -> "EngineConfig":
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if conf.get(f.name) is None:
                continue
            raw = conf[f.name]
            if f.name in ("listing_timeout", "article_timeout"):
                kwargs[f.name] = float(raw)
            elif f.name in ("max_candidates", "raw_candidate_cap", "adapter_max_links", "content_limit", "max_workers"):
                kwargs[f.name] = int(raw)
            else:
                kwargs[f.name] = str(raw)
        return cls(**kwargs)
