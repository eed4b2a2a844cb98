"""Structured logging helpers for the Smart Wardrobe app.

Every record is rendered as one JSON line carrying the correlation id and the
workflow operation it belongs to. Item photos travel as data URLs, so the
redaction pass is responsible for keeping image bytes, remote image links and
account details out of the log stream.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Optional

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)
OPERATION: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("operation", default=None)

SERVICE_NAME = "smart-wardrobe"
MAX_FIELD_LENGTH = 512

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}
_REDACT_KEYS = frozenset(
    {
        "username",
        "password",
        "credential",
        "image_url",
        "imageUrl",
        "images",
        "description",
    }
)
_DATA_URL = re.compile(r"data:[\w.+-]+/[\w.+-]+;base64,[A-Za-z0-9+/=]+")
_REMOTE_URL = re.compile(r"https?://\S+", re.IGNORECASE)
_HANDLER_MARKER = "_smart_wardrobe_handler"


class JsonFormatter(logging.Formatter):
    """Render records as JSON with correlation and operation metadata."""

    def __init__(self, environment: Optional[str] = None) -> None:
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": _redact_string(message),
            "event": getattr(record, "event", None) or message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
            "operation": getattr(record, "operation", None) or OPERATION.get(),
        }
        if self.environment:
            payload["environment"] = self.environment

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload:
                continue
            payload[key] = _truncate(redact_for_log({key: value})[key])

        if record.exc_info:
            payload["exception"] = _redact_string(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: int | str | None = None, environment: Optional[str] = None) -> None:
    """Install the JSON handler on the root logger once and set its level."""

    root = logging.getLogger()
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))
    for handler in root.handlers:
        if getattr(handler, _HANDLER_MARKER, False):
            handler.setFormatter(JsonFormatter(environment))
            return

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(environment))
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)


def _truncate(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_FIELD_LENGTH:
        return f"{value[:MAX_FIELD_LENGTH]}...[{len(value) - MAX_FIELD_LENGTH} more chars]"
    return value


def _redact_string(value: str) -> str:
    """Replace embedded image data and remote URLs wherever they occur."""

    scrubbed = _DATA_URL.sub("[redacted-image]", value)
    return _REMOTE_URL.sub("[redacted-url]", scrubbed)


def redact_for_log(payload: Any) -> Any:
    """Recursively scrub account details and image payloads."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _redact_string(payload)
    if isinstance(payload, (bytes, bytearray)):
        return f"[{len(payload)} bytes]"
    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in _REDACT_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set)):
        return [redact_for_log(item) for item in payload]
    return _redact_string(str(payload))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, installing the JSON handler on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Return the active correlation id, assigning one when none is set."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    new_id = uuid.uuid4().hex
    CORRELATION_ID.set(new_id)
    return new_id


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Temporarily scope a correlation id to one block."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit a structured entry; ``fields`` are redacted before they reach the record."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Tag every record inside the block with ``name`` and a fresh correlation id."""

    operation_token = OPERATION.set(name)
    try:
        with correlation_context(correlation_id) as scoped_id:
            yield scoped_id
    finally:
        OPERATION.reset(operation_token)


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
    "operation_context",
]
