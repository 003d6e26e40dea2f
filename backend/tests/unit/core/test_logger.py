import json
import logging

from site_inspector.core.logger import JSONFormatter, ensure_request_id


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("site_inspector.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_structured_extras():
    line = JSONFormatter().format(_record(event="auth.login", user_id=7, reason="ok", ignored="x"))
    payload = json.loads(line)
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["event"] == "auth.login"
    assert payload["user_id"] == 7
    assert "ignored" not in payload


def test_ensure_request_id_outside_request_is_random():
    assert ensure_request_id() != ensure_request_id()

