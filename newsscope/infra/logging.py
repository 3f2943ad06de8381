"""Logging utilities for the extraction engine.

- Hierarchical loggers (e.g. ``newsscope.scrape.adapter``)
- A single console appender on stderr, pattern or JSON layout
- MDC (Mapped Diagnostic Context) via ``contextvars``; the adapters put the
  site name there so concurrent branches stay distinguishable

Environment variables:
- ``NEWSSCOPE_LOG_LEVEL``: TRACE (same as DEBUG), DEBUG, INFO, WARN, ERROR, FATAL (default: INFO)
- ``NEWSSCOPE_LOG_JSON``: 1 to enable JSON layout (default: 0)
"""

from __future__ import annotations

import contextvars
import json
import logging
import logging.config
import os
import sys
from typing import Any, Dict, Optional

# ---------------- MDC (Mapped Diagnostic Context) ----------------

_MDC: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("MDC", default={})


def mdc_put(key: str, value: Any) -> None:
    d = dict(_MDC.get())
    d[key] = value
    _MDC.set(d)


def mdc_get(key: str, default: Any = None) -> Any:
    return _MDC.get().get(key, default)


def mdc_remove(key: str) -> None:
    d = dict(_MDC.get())
    d.pop(key, None)
    _MDC.set(d)


class MDCFilter(logging.Filter):
    """Attach the MDC to each record as a dict and as a ``k=v`` suffix."""

    def filter(self, record: logging.LogRecord) -> bool:
        d = _MDC.get()
        setattr(record, "mdc", d)
        if d:
            mdc_str = " ".join(f"{k}={v}" for k, v in d.items())
            setattr(record, "mdc_suffix", f" | MDC: {mdc_str}")
        else:
            setattr(record, "mdc_suffix", "")
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        mdc = getattr(record, "mdc", None)
        if isinstance(mdc, dict) and mdc:
            payload["mdc"] = mdc
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# ---------------- Configuration ----------------

_CONFIGURED = False


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


def _level_from_env(name: str, default: str = "INFO") -> int:
    s = str(os.getenv(name, default)).strip().upper()
    aliases = {"WARN": "WARNING", "FATAL": "CRITICAL", "TRACE": "DEBUG"}
    s = aliases.get(s, s)
    return getattr(logging, s, logging.INFO)


def build_logging_config() -> Dict[str, Any]:
    level = _level_from_env("NEWSSCOPE_LOG_LEVEL", "INFO")
    console_formatter = "json" if _env_bool("NEWSSCOPE_LOG_JSON", False) else "pattern"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"mdc": {"()": MDCFilter}},
        "formatters": {
            "pattern": {
                "format": "[%(asctime)s][%(levelname)s][%(name)s] %(message)s%(mdc_suffix)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {"()": JSONFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": console_formatter,
                "filters": ["mdc"],
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def init_logging(force: bool = False) -> None:
    """Configure root logging via dictConfig; no-op when already done unless ``force``."""
    global _CONFIGURED
    if _CONFIGURED and not force:
        return
    logging.config.dictConfig(build_logging_config())
    _CONFIGURED = True


def _ensure_logging() -> None:
    global _CONFIGURED
    if _CONFIGURED or logging.getLogger("").handlers:
        return
    try:
        init_logging()
    except (ValueError, TypeError, AttributeError):
        logging.basicConfig(
            level=logging.INFO, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s"
        )
        _CONFIGURED = True


def get_unified_logger(program: str, task_type: str) -> logging.Logger:
    """Return ``newsscope.<program>.<task_type>``, initializing logging on first use."""
    _ensure_logging()
    return logging.getLogger(f"newsscope.{program}.{task_type}".strip("."))


def log_task_start(program: str, task_type: str, details: Optional[Dict[str, Any]] = None) -> None:
    logger = get_unified_logger(program, task_type)
    logger.info("[TASK START] %s", json.dumps(details or {}, ensure_ascii=False))


def log_task_end(
    program: str, task_type: str, success: bool, details: Optional[Dict[str, Any]] = None
) -> None:
    logger = get_unified_logger(program, task_type)
    payload: Dict[str, Any] = {"success": success}
    if details:
        payload.update(details)
    logger.info("[TASK END] %s", json.dumps(payload, ensure_ascii=False))


def log_processing_step(
    program: str, task_type: str, message: str, details: Optional[Dict[str, Any]] = None
) -> None:
    logger = get_unified_logger(program, task_type)
    if details:
        logger.info("%s | %s", message, json.dumps(details, ensure_ascii=False))
    else:
        logger.info("%s", message)


def log_error(program: str, task_type: str, error: Exception, context: str = "") -> None:
    logger = get_unified_logger(program, task_type)
    if context:
        logger.error("%s | %s", context, error)
    else:
        logger.error("%s", error)


__all__ = [
    "init_logging",
    "build_logging_config",
    "mdc_put",
    "mdc_get",
    "mdc_remove",
    "get_unified_logger",
    "log_task_start",
    "log_task_end",
    "log_processing_step",
    "log_error",
]
