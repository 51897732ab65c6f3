"""LLM client tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from litellm.exceptions import (
    APIConnectionError,
    AuthenticationError,
    BadRequestError,
    RateLimitError,
    ServiceUnavailableError,
)

from docubot.llm import (
    LLMAuthenticationError,
    LLMClient,
    LLMCreditExhaustedError,
    LLMRateLimitError,
    LLMUnavailableError,
)
from docubot.llm.client import is_credit_error


@pytest.fixture
def mock_completion():
    """Mock litellm completion response."""
    with patch("docubot.llm.client.acompletion", new_callable=AsyncMock) as mock:
        mock.return_value = MagicMock(
            choices=[MagicMock(message=MagicMock(content="Test response"))]
        )
        yield mock


@pytest.fixture
def client():
    return LLMClient(provider="groq", model="llama-3.3-70b-versatile", api_key="gsk_test")


async def test_generate_returns_content(client, mock_completion):
    response = await client.generate("Test prompt")

    assert response == "Test response"
    mock_completion.assert_called_once()


async def test_uses_provider_prefixed_model(client, mock_completion):
    await client.generate("Test")

    assert mock_completion.call_args.kwargs["model"] == "groq/llama-3.3-70b-versatile"


async def test_openai_model_has_no_prefix(mock_completion):
    client = LLMClient(provider="openai", model="gpt-4o", api_key="sk-test")

    await client.generate("Test")

    assert mock_completion.call_args.kwargs["model"] == "gpt-4o"


async def test_passes_key_and_single_attempt(client, mock_completion):
    await client.generate("Test")

    kwargs = mock_completion.call_args.kwargs
    assert kwargs["api_key"] == "gsk_test"
    assert kwargs["num_retries"] == 0
    assert kwargs["max_tokens"] == 1024


async def test_passes_system_prompt(client, mock_completion):
    await client.generate("User message", system_prompt="You are a helpful assistant")

    messages = mock_completion.call_args.kwargs["messages"]
    assert messages == [
        {"role": "system", "content": "You are a helpful assistant"},
        {"role": "user", "content": "User message"},
    ]


async def test_complete_builds_documentation_prompt(client, mock_completion):
    await client.complete(
        "How do I deploy?",
        "Source: https://docs.example.com/deploy\n\nRun aio app deploy.",
        "App Builder",
        "https://docs.example.com/",
    )

    system, user = mock_completion.call_args.kwargs["messages"]
    assert "App Builder" in system["content"]
    assert "Answer this question: How do I deploy?" in user["content"]
    assert "Run aio app deploy." in user["content"]
    assert "https://docs.example.com/" in user["content"]


async def test_missing_api_key_fails_without_calling_provider(mock_completion):
    client = LLMClient(provider="groq", api_key=None)

    with pytest.raises(LLMAuthenticationError):
        await client.generate("Test")

    mock_completion.assert_not_called()


async def test_authentication_error_is_mapped(client, mock_completion):
    mock_completion.side_effect = AuthenticationError(
        message="Invalid API Key", llm_provider="groq", model="llama-3.3-70b-versatile"
    )

    with pytest.raises(LLMAuthenticationError):
        await client.generate("Test")


async def test_rate_limit_error_is_mapped(client, mock_completion):
    mock_completion.side_effect = RateLimitError(
        message="Rate limit reached", llm_provider="groq", model="llama-3.3-70b-versatile"
    )

    with pytest.raises(LLMRateLimitError):
        await client.generate("Test")


async def test_credit_error_is_mapped(client, mock_completion):
    mock_completion.side_effect = BadRequestError(
        message="Your credit balance is too low",
        model="llama-3.3-70b-versatile",
        llm_provider="groq",
    )

    with pytest.raises(LLMCreditExhaustedError):
        await client.generate("Test")


async def test_other_bad_request_is_unavailable(client, mock_completion):
    mock_completion.side_effect = BadRequestError(
        message="context length exceeded",
        model="llama-3.3-70b-versatile",
        llm_provider="groq",
    )

    with pytest.raises(LLMUnavailableError):
        await client.generate("Test")


@pytest.mark.parametrize(
    "error",
    [
        APIConnectionError(
            message="Connection refused", llm_provider="groq", model="llama-3.3-70b-versatile"
        ),
        ServiceUnavailableError(
            message="Service down", llm_provider="groq", model="llama-3.3-70b-versatile"
        ),
    ],
)
async def test_provider_failures_are_unavailable(client, mock_completion, error):
    mock_completion.side_effect = error

    with pytest.raises(LLMUnavailableError):
        await client.generate("Test")


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Your credit balance is too low", True),
        ("Billing hard limit reached", True),
        ("You exceeded your current quota", True),
        ("Invalid model name", False),
    ],
)
def test_is_credit_error(message, expected):
    assert is_credit_error(message) is expected
