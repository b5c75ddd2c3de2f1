"""JSON log formatter — error metadata extras."""

import json
import logging

from devconnector.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "devconnector.test", logging.WARNING, __file__, 1,
        "NOT_AUTHORIZED: User not authorized", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_error_metadata_is_emitted():
    line = json.loads(JSONFormatter().format(_record(
        error_code="NOT_AUTHORIZED",
        category="authorization",
        severity="warning",
        resource_id="abc",
        debug_info={"action": "delete_post"},
    )))
    assert line["category"] == "authorization"
    assert line["severity"] == "warning"
    assert line["resource_id"] == "abc"
    assert line["debug_info"] == {"action": "delete_post"}
    assert line["level"] == "WARNING"


def test_unset_extras_are_omitted():
    line = json.loads(JSONFormatter().format(_record(resource_id=None)))
    assert "resource_id" not in line
    assert "debug_info" not in line
