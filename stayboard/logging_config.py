"""Structured logging for Stayboard.

JSON records go to ``<log_dir>/stayboard.log`` (10MB rotation, 5 backups) and a
short human-readable line goes to stdout. Both handlers pass through
``RedactingFilter``, so provider URLs that carry ``appid`` or other keys are
masked no matter which call site logged them.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

from stayboard.middleware.logging_middleware import redact_sensitive_data

LOG_FILE_NAME = "stayboard.log"
DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

# Attributes every LogRecord has; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

# Loggers for outbound calls: their URLs embed the weather API key.
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class RedactingFilter(logging.Filter):
    """Mask credentials in the message, its args, and string ``extra`` fields.

    Also gives every record an ``event_type`` so the console format can rely on it.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_sensitive_data(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(redact_sensitive_data(a) if isinstance(a, str) else a for a in record.args)
        elif isinstance(record.args, dict):
            record.args = {k: redact_sensitive_data(v) if isinstance(v, str) else v for k, v in record.args.items()}

        for name, value in list(vars(record).items()):
            if name not in _RECORD_ATTRS and isinstance(value, str):
                setattr(record, name, redact_sensitive_data(value))

        if not hasattr(record, "event_type"):
            record.event_type = "log"
        return True


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Configure JSON file logging and console logging on the root logger.

    Args:
        log_level: Console and root level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the JSON log file, created if missing

    Returns:
        Configured root logger instance
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    redactor = RedactingFilter()

    json_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    json_handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(event_type)s %(message)s",
            timestamp=True,
        )
    )
    json_handler.setLevel(logging.DEBUG)
    json_handler.addFilter(redactor)
    root_logger.addHandler(json_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s [%(event_type)s] %(message)s", datefmt="%H:%M:%S")
    )
    console_handler.setLevel(level)
    console_handler.addFilter(redactor)
    root_logger.addHandler(console_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with structured fields (``event_type``, ``location``, ...)."""
    getattr(logger, level.lower())(message, extra=extra_fields)
