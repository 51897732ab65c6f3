"""FastAPI dependency injection functions."""

from functools import lru_cache

from docubot.bot.pipeline import DocuBot
from docubot.config import Settings, load_settings
from docubot.security.rate_limit import RateLimiter


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return load_settings()


# One rate limiter for the whole process so every request shares the counters
_rate_limiter_instance: RateLimiter | None = None


def get_rate_limiter() -> RateLimiter:
    """Get the process-wide rate limiter."""
    global _rate_limiter_instance
    if _rate_limiter_instance is None:
        settings = get_settings()
        _rate_limiter_instance = RateLimiter(
            window_seconds=settings.rate_limit.window_seconds,
            max_requests=settings.rate_limit.max_requests,
        )
    return _rate_limiter_instance


def _reset_rate_limiter_instance() -> None:
    """Reset rate limiter instance (for testing only)."""
    global _rate_limiter_instance
    _rate_limiter_instance = None


_docubot_instance: DocuBot | None = None


def get_docubot() -> DocuBot:
    """Get the question pipeline."""
    global _docubot_instance
    if _docubot_instance is None:
        _docubot_instance = DocuBot(get_settings(), rate_limiter=get_rate_limiter())
    return _docubot_instance


def _reset_docubot_instance() -> None:
    """Reset pipeline instance (for testing only)."""
    global _docubot_instance
    _docubot_instance = None
