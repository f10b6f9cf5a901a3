from __future__ import annotations

import json
import logging

from skillgap.logging_config import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("skillgap.roadmap", logging.INFO, __file__, 1, "Roadmap generated: %d steps", (4,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_single_line():
    line = JSONFormatter().format(_record())
    payload = json.loads(line)
    assert "\n" not in line
    assert payload["level"] == "INFO"
    assert payload["logger"] == "skillgap.roadmap"
    assert payload["message"] == "Roadmap generated: 4 steps"


def test_json_formatter_keeps_structured_fields():
    payload = json.loads(JSONFormatter().format(_record(role="Data Analyst", percentage=62, unrelated="x")))
    assert payload["role"] == "Data Analyst"
    assert payload["percentage"] == 62
    assert "unrelated" not in payload
