"""Unit tests for the JSON log formatter."""

from __future__ import annotations

import json
import logging

from storefront.core.logger import JSONFormatter, RequestIdFilter


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("storefront.test", logging.WARNING, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_single_json_line_with_extras():
    record = _record("login failed", endpoint="auth.login", status=400, unrelated="x")
    RequestIdFilter().filter(record)

    line = JSONFormatter().format(record)

    payload = json.loads(line)
    assert "\n" not in line
    assert payload["message"] == "login failed"
    assert payload["level"] == "WARNING"
    assert payload["endpoint"] == "auth.login"
    assert payload["status"] == 400
    assert payload["request_id"] is None
    assert "unrelated" not in payload


def test_request_id_inside_request(app):
    with app.test_request_context(headers={"X-Correlation-ID": "corr-1"}):
        record = _record("hello")
        RequestIdFilter().filter(record)
    assert record.request_id == "corr-1"
