"""Structured logging for the Design Dialogues backend.

Engine log calls pass estimate context (tier, total, weeks) through
``extra``; the request id is stamped on every record by ``RequestIdFilter``
so engine lines can be joined to the request line emitted by the
middleware.
"""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

# Set by RequestTimingMiddleware for the duration of one request
current_request_id: ContextVar[Optional[str]] = ContextVar("current_request_id", default=None)

ESTIMATE_FIELDS = ("tier", "total", "groups", "total_weeks", "anchor", "categories")
HTTP_FIELDS = ("http_method", "http_path", "http_status", "duration_ms")


class RequestIdFilter(logging.Filter):
    """Attach the active request id (or "-") to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = current_request_id.get() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line; estimate and HTTP context nested under their own keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        estimate = {k: getattr(record, k) for k in ESTIMATE_FIELDS if hasattr(record, k)}
        if estimate:
            entry["estimate"] = estimate
        http = {k: getattr(record, k) for k in HTTP_FIELDS if hasattr(record, k)}
        if http:
            entry["http"] = http
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True):
    """Configure application logging (JSON in deployed envs, plain text locally)."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s [%(request_id)s] %(message)s"
        ))
    root.handlers = [handler]

    # uvicorn's access log duplicates the middleware's request line
    for name in ("uvicorn.access", "httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
