from __future__ import annotations

import json
import logging

from event_testkit.core.config import TestkitSettings
from event_testkit.core.logging import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_context() -> None:
    record = logging.LogRecord(
        name="event_testkit.queue.manager",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="job_submitted",
        args=(),
        exc_info=None,
    )
    record.queue = "q1"
    record.attempt = 2

    entry = json.loads(JsonFormatter("event-testkit").format(record))

    assert entry["message"] == "job_submitted"
    assert entry["service"] == "event-testkit"
    assert entry["level"] == "INFO"
    assert entry["queue"] == "q1"
    assert entry["extra"] == {"attempt": 2}
    assert entry["timestamp"].endswith("Z")


def test_configure_logging_installs_single_handler() -> None:
    settings = TestkitSettings(log_level="debug", log_json=True)

    configure_logging(settings)
    configure_logging(settings)

    logger = logging.getLogger("event_testkit")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)
    logger.handlers.clear()
    logger.propagate = True


def test_json_formatter_omits_extra_without_custom_context() -> None:
    record = logging.LogRecord(
        name="event_testkit.testing.publisher",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="events_recorded",
        args=(),
        exc_info=None,
    )

    entry = json.loads(JsonFormatter("event-testkit").format(record))

    assert "extra" not in entry
    assert entry["pid"] == record.process
