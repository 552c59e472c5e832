"""
Log configuration for the lookup CLI.

Each race runs under a correlation id (``lookup-<hex>``). Adapter tasks are
created inside the race, so they inherit it through contextvars and every
provider log line can be grouped per lookup. Library code only emits records;
``setup_logging`` is called by the command line entry point.
"""

import logging
import os
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional, Tuple

from pythonjsonlogger import jsonlogger

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "text"

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"

_correlation_id: ContextVar[Optional[str]] = ContextVar("cep_lookup_correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def generate_correlation_id() -> str:
    return f"lookup-{uuid.uuid4().hex[:16]}"


@contextmanager
def correlation_id_context(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Run the block under ``correlation_id`` (a fresh one if omitted)."""
    token = _correlation_id.set(correlation_id or generate_correlation_id())
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


class CorrelationIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "none"
        return True


class LookupJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record; ``extra`` fields (event, provider_id, ...) are kept."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            timestamp=self.formatTime(record, self.datefmt),
            level=record.levelname,
            logger=record.name,
            correlation_id=getattr(record, "correlation_id", "none"),
            service="cep-lookup",
        )
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def _pick(value: Optional[str], env_name: str, allowed, default: str) -> Tuple[str, Optional[str]]:
    """Return the setting to use and the rejected value, if any."""
    candidate = (value or os.getenv(env_name) or default).strip()
    chosen = {name.lower(): name for name in allowed}.get(candidate.lower())
    if chosen is None:
        return default, candidate
    return chosen, None


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return LookupJsonFormatter("%(timestamp)s %(level)s %(logger)s %(correlation_id)s %(message)s")
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Send all records to stderr, keeping stdout for lookup output.

    ``level`` and ``log_format`` override LOG_LEVEL and LOG_FORMAT. Unknown
    values fall back to WARNING and text.
    """
    log_level, bad_level = _pick(level, "LOG_LEVEL", LOG_LEVELS, DEFAULT_LOG_LEVEL)
    fmt, bad_format = _pick(log_format, "LOG_FORMAT", LOG_FORMATS, DEFAULT_LOG_FORMAT)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter(fmt))
    handler.addFilter(CorrelationIDFilter())

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    if bad_level is not None:
        logger.warning(f"Unknown log level {bad_level!r}, using {log_level}")
    if bad_format is not None:
        logger.warning(f"Unknown log format {bad_format!r}, using {fmt}")
