# -*- coding: utf-8 -*-
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

# Ensure project root is importable for tests
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from newsscope.core.errors import FetchFailure  # noqa: E402


class FakeFetch:
    """In-memory page source; unknown urls fail like a network error."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = dict(pages)
        self.calls: List[Tuple[str, float]] = []

    def __call__(self, url: str, timeout: float) -> str:
        self.calls.append((url, timeout))
        if url not in self.pages:
            raise FetchFailure(url, "connection refused")
        return self.pages[url]


@pytest.fixture
def fake_fetch():
    return FakeFetch
