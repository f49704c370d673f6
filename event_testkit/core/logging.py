"""Structured logging configuration."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from event_testkit.core.config import TestkitSettings


# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))) | {"message", "asctime"}

# Context the harness attaches to dispatch records, lifted to the top level.
_DISPATCH_FIELDS = ("event_store", "listener", "queue", "job", "message_id")


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line.

    Dispatch context such as ``event_store`` or ``listener`` sits next to the
    message; other ``extra=`` values are nested under ``"extra"``.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "pid": record.process,
        }

        context = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        for field in _DISPATCH_FIELDS:
            if field in context:
                entry[field] = context.pop(field)
        if context:
            entry["extra"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(settings: TestkitSettings) -> None:
    """Configure the harness logger tree and quiet SQLAlchemy/httpx chatter."""

    level = getattr(logging, settings.log_level, logging.INFO)

    handler = logging.StreamHandler(stream=sys.stdout)
    if settings.log_json:
        handler.setFormatter(JsonFormatter(settings.service_name))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    testkit_logger = logging.getLogger("event_testkit")
    testkit_logger.setLevel(level)
    testkit_logger.handlers.clear()
    testkit_logger.addHandler(handler)
    testkit_logger.propagate = False

    # Engine echo is controlled by settings.sql_echo, not the log level.
    for logger_name in ("sqlalchemy.engine", "httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))
