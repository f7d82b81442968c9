"""Structured logging configuration."""

import logging
import sys
from typing import Any

from screening.core.config import settings


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "instrument_id"):
            log_data["instrument_id"] = record.instrument_id
        if hasattr(record, "session_id"):
            log_data["session_id"] = record.session_id
        if hasattr(record, "action"):
            log_data["action"] = record.action

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Simple key=value format for readability
        parts = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(parts)


def setup_logging() -> None:
    """Configure root logging for the host application.

    The engine only emits records through module loggers; the application
    embedding it calls this once at startup.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if settings.is_dev:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = StructuredFormatter()

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # YAML parsing is chatty at DEBUG
    logging.getLogger("yaml").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class AssessmentEventLogger:
    """Logger for assessment session lifecycle events."""

    def __init__(self) -> None:
        self.logger = get_logger("screening.events")

    def log(
        self,
        action: str,
        instrument_id: str,
        session_id: str,
        metadata: dict[str, Any] | None = None,
        level: int = logging.INFO,
    ) -> None:
        """Log a session event."""
        self.logger.log(
            level,
            f"EVENT: action={action} instrument={instrument_id} "
            f"session={session_id} metadata={metadata or {}}",
            extra={
                "action": action,
                "instrument_id": instrument_id,
                "session_id": session_id,
            },
        )

    def answer_metadata(self, question_id: str, value: Any) -> dict[str, Any]:
        """Build event metadata for an answer, honouring the value logging setting."""
        metadata: dict[str, Any] = {"question_id": question_id}
        if settings.log_answer_values:
            metadata["value"] = value
        return metadata


event_logger = AssessmentEventLogger()
