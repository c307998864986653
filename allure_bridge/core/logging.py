"""
Logging utilities for the FastAPI application and operational scripts.

Provides a consistent logging format and keeps upstream credentials out of
log output.
"""

import logging
import re
import sys

_SECRET_FIELD_PATTERN = re.compile(
    r"""(?P<key>["']?(?:access_token|refresh_token|id_token|token)["']?\s*[:=]\s*["']?)"""
    r"""(?P<value>[^"'&,\s}]+)""",
    re.IGNORECASE,
)
_BEARER_PATTERN = re.compile(r"(?P<key>Bearer\s+)(?P<value>[A-Za-z0-9\-._~+/]+=*)", re.IGNORECASE)
_MASK = "***"


def redact_secrets(text: str) -> str:
    """Mask token values in JSON bodies, form payloads and auth headers."""
    if not text:
        return text
    redacted = _SECRET_FIELD_PATTERN.sub(lambda m: m.group("key") + _MASK, text)
    return _BEARER_PATTERN.sub(lambda m: m.group("key") + _MASK, redacted)


class SecretRedactingFilter(logging.Filter):
    """Rewrite log records so rendered messages never carry token values."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact_secrets(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, SecretRedactingFilter) for f in handler.filters):
            handler.addFilter(SecretRedactingFilter())


__all__ = ["SecretRedactingFilter", "configure_logging", "redact_secrets"]
