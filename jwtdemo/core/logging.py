"""jwtdemo Logging Configuration.

Bearer tokens and passwords are scrubbed from every record before it is
formatted, whichever output format is active.
"""

import json
import logging
import re
import sys
from typing import Literal

# Human-readable format for development
DEV_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

REDACTED = "***REDACTED***"

# Compact JWS: three base64url segments, the first always starting with "eyJ"
_JWT_PATTERN = re.compile(r"eyJ[A-Za-z0-9_\-]*\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]*")
_BEARER_PATTERN = re.compile(r"(bearer\s+)(\S+)", re.IGNORECASE)
_PASSWORD_PATTERN = re.compile(
    r"(['\"]?password['\"]?\s*[:=]\s*['\"]?)([^'\",\s}]+)", re.IGNORECASE
)


def redact(message: str) -> str:
    """Mask JWTs, bearer credentials and password values in a log message."""
    message = _JWT_PATTERN.sub(REDACTED, message)
    message = _BEARER_PATTERN.sub(rf"\1{REDACTED}", message)
    return _PASSWORD_PATTERN.sub(rf"\1{REDACTED}", message)


class RedactingFilter(logging.Filter):
    """Rewrite the record's message with secrets masked. Never drops records."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line; json.dumps() escapes quotes and newlines."""

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    format_type: Literal["structured", "dev"] = "dev",
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Log format - 'structured' for JSON, 'dev' for readable
    """
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(RedactingFilter())

    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper()))

    # Access logs would print every request line
    for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    # httpx logs each client request at INFO
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING
    )

    logger = logging.getLogger("jwtdemo")
    logger.info(f"Logging configured: level={level}, format={format_type}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the jwtdemo prefix."""
    return logging.getLogger(f"jwtdemo.{name}")
