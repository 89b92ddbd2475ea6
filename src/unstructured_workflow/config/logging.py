"""Logging configuration with JSON format support.

The library itself only creates module loggers. Applications (and the CLI)
call :func:`configure_logging` to install handlers.
"""

import json
import logging
import re
import sys
from datetime import UTC, datetime
from typing import Any

_SENSITIVE_PATTERNS = [
    (r"unstructured-api-key[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+", "unstructured-api-key=[REDACTED]"),
    (r"(provider_|es_|kafka_|iam_)?api_key[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+", "api_key=[REDACTED]"),
    (r"client_(cred|secret)[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+", "client_secret=[REDACTED]"),
    (r"password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+", "password=[REDACTED]"),
    (r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+", "token=[REDACTED]"),
    (r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+", "secret=[REDACTED]"),
]


def sanitize_log_message(message: str, sensitive_patterns: list[str] | None = None) -> str:
    """Sanitize a log message to remove credentials.

    Args:
        message: Message to sanitize
        sensitive_patterns: Additional patterns to redact

    Returns:
        Sanitized message with sensitive data redacted
    """
    result = message
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = re.sub(pattern, replacement, result, flags=re.IGNORECASE)

    if sensitive_patterns:
        for pattern in sensitive_patterns:
            result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)

    return result


class SanitizingFilter(logging.Filter):
    """Filter that strips API keys and connector secrets from log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = sanitize_log_message(str(record.msg))
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                sanitize_log_message(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    # Request fields the transport attaches via ``extra=``
    _OPTIONAL_FIELDS = (
        "method",
        "path",
        "status_code",
        "duration_ms",
        "operation",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self._OPTIONAL_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class TextFormatter(logging.Formatter):
    """Standard text formatter with consistent format."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def configure_logging(
    level: str = "WARNING", format: str = "text", sanitize_logs: bool = True
) -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format ('text' or 'json')
        sanitize_logs: If True, redact API keys and connector secrets
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if format.lower() == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(TextFormatter())

    if sanitize_logs:
        console_handler.addFilter(SanitizingFilter())

    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
