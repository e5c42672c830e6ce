"""Logging setup.

``configure_logging`` installs a single stderr handler on the root
logger.  With ``structured_logging`` enabled every record is emitted as
one JSON object per line::

    {
        "timestamp": "2026-05-15T12:34:56.789012+00:00",
        "level": "DEBUG",
        "logger": "uri_repository.registry",
        "message": "Registered scheme 'resource' (factory)",
        "exc_info": "Traceback ..."  // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from uri_repository.config import Settings

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scheme = getattr(record, "scheme", None)
        if scheme is not None:
            payload["scheme"] = scheme

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """Replace the root logger's handlers according to *settings*.

    Returns the installed handler.
    """
    settings = settings if settings is not None else Settings()

    handler = logging.StreamHandler()
    if settings.structured_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if settings.debug else settings.log_level)
    return handler
