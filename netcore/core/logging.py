"""
Logging setup for the networking core and the tooling scripts.

Library modules only call ``logging.getLogger(__name__)``; the process entry
point calls ``configure_logging`` once. Every handler installed here masks
bearer credentials and token fields, so a request or response that ends up in
a log line (httpx logs URLs and headers at DEBUG) never leaks a session.
"""

import logging
import re
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_SECRET_PATTERNS = (
    re.compile(r"(Bearer\s+)[^\s\"',]+", re.IGNORECASE),
    re.compile(r"((?:access|refresh)_token[\"']?\s*[:=]\s*[\"']?)[^\s\"'&,}]+"),
)
REDACTED = "[REDACTED]"


def redact(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(rf"\g<1>{REDACTED}", text)
    return text


class RedactingFilter(logging.Filter):
    """Rewrites the formatted message with credentials masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def configure_logging(level: str = "INFO") -> None:
    level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if not any(isinstance(f, RedactingFilter) for f in handler.filters):
            handler.addFilter(RedactingFilter())
    # httpx reports every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if level == "DEBUG" else logging.WARNING)


__all__ = ["LOG_FORMAT", "REDACTED", "RedactingFilter", "configure_logging", "redact"]
