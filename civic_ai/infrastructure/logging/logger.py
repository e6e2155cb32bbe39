"""Structured logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    silence_noisy_loggers: bool = True,
) -> None:
    """Configure the root logger for the application."""
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    if silence_noisy_loggers:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


class StructuredLogger:
    """
    JSON event log for the classification pipeline.

    One ``log_step`` record is written per classification (``classify_image``
    or ``classify_text``) with the mapped category, confidence and fallback
    flag. ``log_error`` records the failure that turned a request into a
    fallback result, including which transport failed and its HTTP status
    when the error carries them.
    """

    def __init__(self, name: str = __name__):
        self.logger = logging.getLogger(name)

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def log_step(
        self,
        step: str,
        state: dict[str, Any],
        duration_ms: float | None = None,
    ) -> None:
        """Log a finished classification step and its outcome."""
        event: dict[str, Any] = {"step": step, "timestamp": self._now(), "state": state}
        if duration_ms is not None:
            event["duration_ms"] = round(duration_ms, 1)
        self.logger.info(json.dumps(event, ensure_ascii=False))

    def log_error(
        self,
        step: str,
        error: Exception,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Log the error behind a fallback result."""
        event: dict[str, Any] = {
            "step": step,
            "timestamp": self._now(),
            "error": str(error),
            "error_type": type(error).__name__,
        }
        # Transport errors name the failing transport and, for REST, the status.
        for attr in ("transport", "status_code"):
            value = getattr(error, attr, None)
            if value is not None:
                event[attr] = value
        if context:
            event["context"] = context
        self.logger.error(json.dumps(event, ensure_ascii=False), exc_info=error)
