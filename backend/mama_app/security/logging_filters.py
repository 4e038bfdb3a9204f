"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|(?:access_token|session_token)\"?\s*[:=]\s*\"?[\w\.-]+\"?"
    r"|(?:password|password_confirmation|new_password)\"\s*:\s*\"[^\"]+\""
    r"|(?:otp|code)\"\s*:\s*\"\d+\")",
    re.IGNORECASE,
)


def scrub(message: str) -> str:
    """Replace credentials in ``message`` with a redaction marker."""
    return _SENSITIVE_PATTERN.sub("**REDACTED**", message)


class SensitiveFilter(logging.Filter):
    """Replace sensitive tokens in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: scrub(value) if isinstance(value, str) else value
                    for key, value in record.args.items()
                }
            else:
                record.args = tuple(
                    scrub(arg) if isinstance(arg, str) else arg for arg in record.args
                )
        return True


def install_sensitive_filter(
    logger_names: tuple[str, ...] = ("uvicorn", "uvicorn.access", "uvicorn.error", ""),
) -> None:
    """Attach a single SensitiveFilter to each named logger."""
    for logger_name in logger_names:
        target = logging.getLogger(logger_name)
        if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
            target.addFilter(SensitiveFilter())


__all__ = ["SensitiveFilter", "install_sensitive_filter", "scrub"]
