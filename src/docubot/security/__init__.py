"""Request screening: rate limiting, input validation and log redaction."""

from docubot.security.masking import (
    SensitiveDataFilter,
    install_log_masking,
    mask_params,
    mask_sensitive,
)
from docubot.security.rate_limit import RateLimiter, RateLimitResult, RateWindow
from docubot.security.validation import ValidationResult, sanitize, validate_input

__all__ = [
    "RateLimitResult",
    "RateLimiter",
    "RateWindow",
    "SensitiveDataFilter",
    "ValidationResult",
    "install_log_masking",
    "mask_params",
    "mask_sensitive",
    "sanitize",
    "validate_input",
]
