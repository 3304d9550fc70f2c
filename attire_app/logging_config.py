"""JSON logging for the advisor, with correlation ids and scrubbing of user data.

Every request handled by the app runs inside an ``operation_context`` so the
log lines it produces share one ``correlation_id``. Wardrobe photos, occasion
text and resolved locations are never written verbatim: ``redact_for_log``
replaces them before they reach a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import time
import uuid
from typing import Any, Dict, Iterator, Mapping

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {"message", "asctime"}
SENSITIVE_KEYS = frozenset(
    {"image_data", "image_base64", "raw_input", "occasion_text", "prompt", "location", "email"}
)
REDACTED = "[redacted]"
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")
_MAX_STRING_LENGTH = 200


class JsonFormatter(logging.Formatter):
    """One JSON object per line: level, logger, event, correlation id and extras."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", message),
            "message": message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        for key, value in _extra_fields(record).items():
            payload.setdefault(key, redact_for_log(value))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}


def configure_logging(level: int | str | None = None) -> None:
    """Send root logging to stderr as JSON at ``level`` (or ``LOG_LEVEL``)."""

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.upper()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def _scrub_text(value: str) -> str:
    if _EMAIL.search(value):
        return _EMAIL.sub("[redacted-email]", value)
    if value.lower().startswith("http"):
        return "[redacted-url]"
    if len(value) > _MAX_STRING_LENGTH:
        # Long strings are usually base64 image payloads or raw model replies.
        return value[:_MAX_STRING_LENGTH] + "...[truncated]"
    return value


def redact_for_log(payload: Any) -> Any:
    """Return a copy of ``payload`` that is safe to log.

    Values under ``SENSITIVE_KEYS`` are replaced wholesale. Other strings lose
    email addresses and URLs and are clipped when long. Containers are walked
    recursively; tuples come back as lists.
    """

    if isinstance(payload, Mapping):
        return {
            key: REDACTED if key in SENSITIVE_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set)):
        return [redact_for_log(item) for item in payload]
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    return _scrub_text(str(payload))


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Bind ``correlation_id`` (or the current one, or a fresh one) and return it."""

    resolved = correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex
    if CORRELATION_ID.get() != resolved:
        CORRELATION_ID.set(resolved)
    return resolved


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block, then restore the old one."""

    scoped_id = correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex
    token = CORRELATION_ID.set(scoped_id)
    try:
        yield scoped_id
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted ``fields`` attached as record extras.

    ``correlation_id`` and ``exc_info`` are consumed here. Fields that would
    collide with built-in LogRecord attributes are dropped.
    """

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    extras = redact_for_log({key: value for key, value in fields.items() if key not in _RECORD_ATTRS})
    extras.update(event=event, correlation_id=correlation_id)
    logger.log(level, event, exc_info=exc_info, extra=extras)


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Run one named operation under a correlation id and log how long it took."""

    logger = logging.getLogger(__name__)
    started = time.perf_counter()
    with correlation_context(correlation_id) as scoped_id:
        try:
            yield scoped_id
        finally:
            if logger.isEnabledFor(logging.DEBUG):
                log_event(
                    logger,
                    logging.DEBUG,
                    "operation_finished",
                    operation=name,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "REDACTED",
    "SENSITIVE_KEYS",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
