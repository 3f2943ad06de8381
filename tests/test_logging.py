from __future__ import annotations

import json
import logging

from newsscope.infra.logging import JSONFormatter, MDCFilter, build_logging_config, mdc_get, mdc_put, mdc_remove


def test_level_and_layout_from_env(monkeypatch):
    monkeypatch.setenv("NEWSSCOPE_LOG_LEVEL", "warn")
    monkeypatch.setenv("NEWSSCOPE_LOG_JSON", "1")
    cfg = build_logging_config()
    assert cfg["root"]["level"] == logging.WARNING
    assert cfg["handlers"]["console"]["formatter"] == "json"


def test_mdc_is_attached_to_json_records():
    mdc_put("site", "CNN")
    try:
        rec = logging.LogRecord("newsscope.scrape.adapter", logging.INFO, __file__, 1, "hello", None, None)
        assert MDCFilter().filter(rec)
        payload = json.loads(JSONFormatter().format(rec))
        assert payload["mdc"] == {"site": "CNN"}
        assert rec.mdc_suffix == " | MDC: site=CNN"
    finally:
        mdc_remove("site")
    assert mdc_get("site") is None


def test_trace_level_maps_to_debug(monkeypatch):
    monkeypatch.setenv("NEWSSCOPE_LOG_LEVEL", "TRACE")
    assert build_logging_config()["root"]["level"] == logging.DEBUG
