"""Redaction of credentials in log output."""

import logging
import re
from collections.abc import Mapping
from typing import Any

from docubot.constants.security import MASK_KEEP_CHARS, MASK_PLACEHOLDER, SENSITIVE_PARAM_KEYS

# (pattern, replacement) pairs, applied in order. Anthropic keys come before
# the generic sk- pattern so they keep their more specific prefix.
_SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"sk-ant-[a-zA-Z0-9\-_]+"), "sk-ant-***MASKED***"),
    (re.compile(r"sk-(?!ant-)[a-zA-Z0-9]{20,}"), "sk-***MASKED***"),
    (re.compile(r"gsk_[a-zA-Z0-9]{20,}"), "gsk_***MASKED***"),
    (re.compile(r"xoxb-[a-zA-Z0-9\-]+"), "xoxb-***MASKED***"),
    (re.compile(r"Bearer\s+[a-zA-Z0-9\-_.]+", re.IGNORECASE), "Bearer ***MASKED***"),
    (
        re.compile(r"Authorization:\s*Basic\s+[a-zA-Z0-9+/=]+", re.IGNORECASE),
        "Authorization: Basic ***MASKED***",
    ),
]


def mask_sensitive(text: Any) -> Any:
    """Mask API keys and auth headers in a string.

    Non-string values are returned unchanged.
    """
    if not isinstance(text, str) or not text:
        return text
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def mask_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of params with credential values masked, safe to log."""
    masked = dict(params)
    for key in SENSITIVE_PARAM_KEYS:
        value = masked.get(key)
        if not value:
            continue
        if isinstance(value, str) and len(value) > MASK_KEEP_CHARS * 2:
            masked[key] = value[:MASK_KEEP_CHARS] + MASK_PLACEHOLDER + value[-MASK_KEEP_CHARS:]
        else:
            masked[key] = MASK_PLACEHOLDER
    return masked


class SensitiveDataFilter(logging.Filter):
    """Logging filter that redacts secrets from every record.

    The message is rendered with its args first so secrets passed as
    %-style arguments are caught too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            message = str(record.msg)
        record.msg = mask_sensitive(message)
        record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = mask_sensitive(record.exc_text)
        return True


def install_log_masking(logger: logging.Logger | None = None) -> None:
    """Attach SensitiveDataFilter to every handler of logger (root by default)."""
    target = logger or logging.getLogger()
    for handler in target.handlers:
        if not any(isinstance(f, SensitiveDataFilter) for f in handler.filters):
            handler.addFilter(SensitiveDataFilter())
