"""Logging setup for the registry service and CLI."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from projreg.config import Settings

_LOGGING_CONFIGURED = False
_RESERVED_LOG_RECORD_FIELDS = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_LOG_RECORD_FIELDS or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=True)


def configure_logging(
    settings: Settings,
    *,
    stream: TextIO | None = None,
    force: bool = False,
) -> logging.Logger:
    """Attach one stdout handler to the `projreg` logger; repeat calls are no-ops."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    app_logger = logging.getLogger("projreg")
    if _LOGGING_CONFIGURED and not force:
        return app_logger

    level = getattr(logging, settings.log_level, logging.INFO)
    formatter: logging.Formatter
    if settings.log_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False

    app_logger.debug(
        "logging configured level=%s json=%s",
        settings.log_level,
        str(settings.log_json).lower(),
    )
    _LOGGING_CONFIGURED = True
    return app_logger
