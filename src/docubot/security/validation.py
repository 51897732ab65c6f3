"""Question validation and sanitization."""

import re
from dataclasses import dataclass

from docubot.constants.security import MAX_QUESTION_LENGTH

EMPTY_QUESTION_ERROR = "Question cannot be empty"

# Characters that could be read back as markup or template interpolation
_MARKUP_CHARS = re.compile(r"[<>]")
_TEMPLATE_CHARS = re.compile(r"[${}]")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_input.

    When valid is True, sanitized holds the cleaned question and error is None.
    Otherwise sanitized is empty and error holds a user-facing reason.
    """

    valid: bool
    sanitized: str
    error: str | None = None


def too_long_error(max_length: int) -> str:
    return f"Question is too long (max {max_length} characters)"


def sanitize(text: str) -> str:
    """Strip characters that could be reinterpreted downstream.

    Angle brackets, dollar signs, braces and backslashes are removed and
    backticks become single quotes. Everything else is left untouched.
    """
    cleaned = _MARKUP_CHARS.sub("", text)
    cleaned = _TEMPLATE_CHARS.sub("", cleaned)
    cleaned = cleaned.replace("`", "'")
    cleaned = cleaned.replace("\\", "")
    return cleaned.strip()


def validate_input(text: object, max_length: int = MAX_QUESTION_LENGTH) -> ValidationResult:
    """Validate and sanitize a user question.

    Args:
        text: Raw question text. Non-string values are rejected as empty.
        max_length: Maximum length of the trimmed question.

    Returns:
        ValidationResult describing the outcome.
    """
    if not isinstance(text, str):
        return ValidationResult(valid=False, sanitized="", error=EMPTY_QUESTION_ERROR)

    trimmed = text.strip()
    if not trimmed:
        return ValidationResult(valid=False, sanitized="", error=EMPTY_QUESTION_ERROR)

    if len(trimmed) > max_length:
        return ValidationResult(valid=False, sanitized="", error=too_long_error(max_length))

    sanitized = sanitize(trimmed)
    if not sanitized:
        # Nothing left once markup characters are gone
        return ValidationResult(valid=False, sanitized="", error=EMPTY_QUESTION_ERROR)

    return ValidationResult(valid=True, sanitized=sanitized)
