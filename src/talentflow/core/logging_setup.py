"""
Logging configuration for the ``talentflow`` logger hierarchy.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from .config import LoggingSettings

LOGGER_NAME = "talentflow"

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields are merged in."""

    _reserved = set(
        logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in self._reserved and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """Attach handlers to the ``talentflow`` logger once per process."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    if _configured:
        return logger

    settings = settings or LoggingSettings()
    if settings.format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s"
        )

    handlers = [logging.StreamHandler()]
    if settings.file_path:
        handlers.append(logging.FileHandler(settings.file_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(settings.level)
    logger.propagate = False
    _configured = True
    return logger
