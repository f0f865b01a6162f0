from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Optional

from epr.config import LoggingSettings, settings

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

_HANDLER_NAME = "epr-console"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with `extra` fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(config: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Attach a single stderr handler to the `epr` logger.
    Safe to call repeatedly; the handler is replaced, never duplicated.
    """
    config = config or settings.logging
    logger = logging.getLogger("epr")
    logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if config.format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
