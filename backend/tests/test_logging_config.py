"""
test_logging_config.py — JSON log formatting and request-id propagation.
"""

import json
import logging

from app.services.logging_config import JSONFormatter, RequestIdFilter, current_request_id


def _record(**extra):
    record = logging.LogRecord(
        name="design-dialogues.costing", level=logging.DEBUG, pathname=__file__,
        lineno=10, msg="cost estimate computed", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_estimate_context_nested(self):
        record = _record(tier="Standard", total=56_600, request_id="abc")
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "cost estimate computed"
        assert entry["request_id"] == "abc"
        assert entry["estimate"] == {"tier": "Standard", "total": 56_600}
        assert "http" not in entry

    def test_http_context_nested(self):
        record = _record(http_method="POST", http_status=200, duration_ms=1.5)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["http"] == {"http_method": "POST", "http_status": 200, "duration_ms": 1.5}
        assert "estimate" not in entry


class TestRequestIdFilter:

    def test_defaults_to_dash(self):
        record = _record()
        assert RequestIdFilter().filter(record)
        assert record.request_id == "-"

    def test_uses_context_variable(self):
        token = current_request_id.set("req-42")
        try:
            record = _record()
            RequestIdFilter().filter(record)
        finally:
            current_request_id.reset(token)
        assert record.request_id == "req-42"

    def test_explicit_request_id_wins(self):
        token = current_request_id.set("req-42")
        try:
            record = _record(request_id="explicit")
            RequestIdFilter().filter(record)
        finally:
            current_request_id.reset(token)
        assert record.request_id == "explicit"
