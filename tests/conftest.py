"""Shared pytest fixtures for all tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from docubot.api.deps import _reset_docubot_instance, _reset_rate_limiter_instance, get_settings
from docubot.bot.pipeline import DocuBot
from docubot.config import Config, load_settings
from docubot.docs.fetcher import ScrapeResult
from docubot.security.rate_limit import RateLimiter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from the developer's environment and cached singletons."""
    for name in (
        "GROQ_API_KEY",
        "DOCS_BASE_URL",
        "DOCS_NAME",
        "SLACK_BOT_TOKEN",
        "SLACK_SIGNING_SECRET",
        "LOG_LEVEL",
        "LLM_PROVIDER",
        "LLM_MODEL",
        "DOCUBOT_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    get_settings.cache_clear()
    _reset_rate_limiter_instance()
    _reset_docubot_instance()
    yield
    load_settings.cache_clear()
    get_settings.cache_clear()
    _reset_rate_limiter_instance()
    _reset_docubot_instance()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    """Default settings with an API key configured."""
    return Config(groq_api_key="gsk_testkey1234567890abcdef")


@pytest.fixture
def scrape_result():
    return ScrapeResult(
        urls=["https://developer.adobe.com/app-builder/docs/guides/actions/"],
        categories=["actions"],
        content="Source: https://developer.adobe.com/app-builder/docs/guides/actions/\n\n"
        "Actions are serverless functions.",
    )


@pytest.fixture
def mock_fetcher(scrape_result):
    fetcher = MagicMock()
    fetcher.scrape = AsyncMock(return_value=scrape_result)
    return fetcher


@pytest.fixture
def mock_llm():
    llm = MagicMock()
    llm.complete = AsyncMock(
        return_value=(
            "🤖 *DocuBot*\n\nDeploy with `aio app deploy`.\n"
            "💡 Pro tip: Run `aio app run` locally first.\n"
            "📖 https://developer.adobe.com/app-builder/docs/guides/deployment/"
        )
    )
    return llm


@pytest.fixture
def mock_delivery():
    delivery = MagicMock()
    delivery.send = AsyncMock(return_value=True)
    return delivery


@pytest.fixture
def bot(settings, clock, mock_fetcher, mock_llm, mock_delivery):
    """Pipeline wired to mocks, with a 3-requests-per-minute limit."""
    return DocuBot(
        settings,
        rate_limiter=RateLimiter(window_seconds=60, max_requests=3, clock=clock),
        fetcher=mock_fetcher,
        delivery=mock_delivery,
        llm_factory=lambda config: mock_llm,
    )
