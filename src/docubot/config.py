"""Configuration system for DocuBot.

Settings come from two places: tunables (limits, budgets, timeouts) are read
from an optional INI file and validated against CONFIG_SCHEMA, while
credentials and the documentation source come from environment variables.
Per-request overrides produce a new frozen Config; nothing is mutated in place.
"""

import os
from configparser import ConfigParser
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from docubot.constants.docs import (
    DEFAULT_DOCS_BASE_URL,
    DEFAULT_DOCS_NAME,
    DELIVERY_TIMEOUT_SECONDS,
    FETCH_TIMEOUT_SECONDS,
    MAX_PAGE_BYTES,
    MAX_REDIRECTS,
    MAX_URLS,
    PER_PAGE_CHAR_LIMIT,
    TOTAL_CHAR_LIMIT,
)
from docubot.constants.llm import (
    COMPLETION_TIMEOUT_SECONDS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    MAX_TOKENS,
)
from docubot.constants.security import (
    MAX_QUESTION_LENGTH,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
)


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "rate_limit": {
        "window_seconds": (int, RATE_LIMIT_WINDOW_SECONDS, 1, 3600, "Rate limit window length"),
        "max_requests": (int, RATE_LIMIT_MAX_REQUESTS, 1, 1000, "Requests allowed per window"),
    },
    "validation": {
        "max_question_length": (int, MAX_QUESTION_LENGTH, 10, 4000, "Max question characters"),
    },
    "docs": {
        "max_urls": (int, MAX_URLS, 1, 10, "Pages fetched per question"),
        "per_page_chars": (int, PER_PAGE_CHAR_LIMIT, 500, 50_000, "Per-page text limit"),
        "total_chars": (int, TOTAL_CHAR_LIMIT, 1000, 100_000, "Combined text limit"),
        "fetch_timeout": (float, FETCH_TIMEOUT_SECONDS, 0.5, 60.0, "Per-page fetch timeout"),
        "max_redirects": (int, MAX_REDIRECTS, 0, 20, "Redirects followed per page"),
        "max_page_bytes": (int, MAX_PAGE_BYTES, 10_000, 50_000_000, "Bytes read per page"),
    },
    "llm": {
        "max_tokens": (int, MAX_TOKENS, 64, 8192, "Max response tokens"),
        "temperature": (float, DEFAULT_TEMPERATURE, 0.0, 2.0, "LLM temperature"),
        "timeout": (float, COMPLETION_TIMEOUT_SECONDS, 1.0, 300.0, "Completion timeout"),
    },
    "delivery": {
        "timeout": (float, DELIVERY_TIMEOUT_SECONDS, 0.5, 60.0, "Deferred response timeout"),
    },
}


@dataclass(frozen=True)
class RateLimitConfig:
    """Per-user rate limiting configuration."""

    window_seconds: int
    max_requests: int


@dataclass(frozen=True)
class ValidationConfig:
    """Question screening configuration."""

    max_question_length: int


@dataclass(frozen=True)
class DocsConfig:
    """Documentation retrieval configuration."""

    max_urls: int
    per_page_chars: int
    total_chars: int
    fetch_timeout: float
    max_redirects: int
    max_page_bytes: int


@dataclass(frozen=True)
class LLMConfig:
    """LLM client configuration."""

    max_tokens: int
    temperature: float
    timeout: float


@dataclass(frozen=True)
class DeliveryConfig:
    """Deferred response configuration."""

    timeout: float


_SECTION_TYPES = {
    "rate_limit": RateLimitConfig,
    "validation": ValidationConfig,
    "docs": DocsConfig,
    "llm": LLMConfig,
    "delivery": DeliveryConfig,
}


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: int | float | str
            try:
                if typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    value = raw_value
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        if typ in (int, float):
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )

        result[key] = value

    return result


def _default_section(section: str) -> Any:
    values = {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}
    return _SECTION_TYPES[section](**values)


def _load_config(config_path: Optional[Path] = None) -> "Config":
    """Load tunables from an INI file (internal use only).

    Args:
        config_path: Path to config file. If None, uses defaults from schema.

    Returns:
        Config with every section populated and environment fields at defaults.

    Raises:
        ConfigError: If validation fails
    """
    parser = ConfigParser()

    if config_path and config_path.exists():
        parser.read(config_path)

    sections = {
        name: _SECTION_TYPES[name](**_load_section(parser, name, schema))
        for name, schema in CONFIG_SCHEMA.items()
    }
    return Config(**sections)


@dataclass(frozen=True)
class Config:
    """Complete application configuration.

    Instances are immutable. Use with_overrides() to derive the configuration
    for a single request.
    """

    groq_api_key: Optional[str] = None
    docs_base_url: str = DEFAULT_DOCS_BASE_URL
    docs_name: str = DEFAULT_DOCS_NAME
    slack_bot_token: Optional[str] = None
    slack_signing_secret: Optional[str] = None
    log_level: str = "INFO"
    llm_provider: str = DEFAULT_PROVIDER
    llm_model: str = DEFAULT_MODEL

    rate_limit: RateLimitConfig = None  # type: ignore[assignment]
    validation: ValidationConfig = None  # type: ignore[assignment]
    docs: DocsConfig = None  # type: ignore[assignment]
    llm: LLMConfig = None  # type: ignore[assignment]
    delivery: DeliveryConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        """Fill in section defaults and normalize the docs base URL."""
        # Since frozen=True, we need to use object.__setattr__
        for section in CONFIG_SCHEMA:
            if getattr(self, section) is None:
                object.__setattr__(self, section, _default_section(section))
        if not self.docs_base_url.endswith("/"):
            object.__setattr__(self, "docs_base_url", self.docs_base_url + "/")

    @property
    def llm_api_key(self) -> Optional[str]:
        """API key for the completion provider."""
        return self.groq_api_key

    def with_overrides(
        self,
        groq_api_key: Optional[str] = None,
        docs_base_url: Optional[str] = None,
        docs_name: Optional[str] = None,
        slack_bot_token: Optional[str] = None,
        slack_signing_secret: Optional[str] = None,
    ) -> "Config":
        """Return a copy with the given non-empty values replaced.

        Empty strings and None leave the current value in place.
        """
        changes = {
            key: value
            for key, value in (
                ("groq_api_key", groq_api_key),
                ("docs_base_url", docs_base_url),
                ("docs_name", docs_name),
                ("slack_bot_token", slack_bot_token),
                ("slack_signing_secret", slack_signing_secret),
            )
            if value
        }
        if not changes:
            return self
        return replace(self, **changes)


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from environment variables and the optional config file.

    Settings are cached for the lifetime of the application.
    Use load_settings.cache_clear() to reload settings.

    Returns:
        Config populated from DOCUBOT_CONFIG (INI) and the environment.

    Raises:
        ConfigError: If the config file holds invalid values.
    """
    config_file_str = os.getenv("DOCUBOT_CONFIG")
    config_file = Path(config_file_str) if config_file_str else None
    base_config = _load_config(config_file)

    return replace(
        base_config,
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        docs_base_url=os.getenv("DOCS_BASE_URL") or DEFAULT_DOCS_BASE_URL,
        docs_name=os.getenv("DOCS_NAME") or DEFAULT_DOCS_NAME,
        slack_bot_token=os.getenv("SLACK_BOT_TOKEN") or None,
        slack_signing_secret=os.getenv("SLACK_SIGNING_SECRET") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        llm_provider=os.getenv("LLM_PROVIDER", DEFAULT_PROVIDER),
        llm_model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
    )


Settings = Config
