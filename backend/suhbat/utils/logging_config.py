"""
Structured Logging Configuration

Provides plain console logging for development and JSON-formatted logging for production.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging import LogRecord
from typing import Any, Dict

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs", "message", "pathname",
    "process", "processName", "relativeCreated", "thread", "threadName",
    "exc_info", "exc_text", "stack_info", "taskName",
}


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs logs in JSON format with timestamp, level, logger name, message, and extra fields.
    """

    def format(self, record: LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add any custom fields passed via extra parameter
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            # Ensure value is JSON serializable
            try:
                json.dumps({key: value})
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatting on the console (default False)

    Example:
        setup_logging(level="DEBUG", json_format=True)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Get root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Create console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        # Use standard format for development
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        )

    root_logger.addHandler(console_handler)

    # Set specific loggers to appropriate levels
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def log_llm_call(
    logger: logging.Logger,
    attempt: int,
    max_attempts: int,
    prompt_chars: int,
    latency_ms: float = None,
    model: str = None,
    **extra
) -> None:
    """
    Log a completed LLM API call with standardized fields.

    Example:
        log_llm_call(logger, attempt=1, max_attempts=3, prompt_chars=1800,
                     latency_ms=1250.5, model="gemini-flash-latest")
    """
    log_data = {
        "event": "llm_call",
        "attempt": attempt,
        "max_attempts": max_attempts,
        "prompt_chars": prompt_chars,
    }

    if latency_ms is not None:
        log_data["latency_ms"] = latency_ms
    if model is not None:
        log_data["model"] = model

    log_data.update(extra)

    logger.info("LLM call completed", extra=log_data)


def log_interview_event(
    logger: logging.Logger,
    profession: str,
    event_type: str,
    **extra
) -> None:
    """
    Log interview-level events.

    Args:
        logger: The logger instance
        profession: Profession id the interview is for
        event_type: Type of event (started, question_asked, evaluated, fallback)
        **extra: Additional fields

    Example:
        log_interview_event(logger, profession="frontend", event_type="question_asked", question_number=3)
    """
    log_data = {
        "event": "interview_event",
        "profession": profession,
        "event_type": event_type,
    }

    log_data.update(extra)

    logger.info(f"Interview event: {event_type}", extra=log_data)
