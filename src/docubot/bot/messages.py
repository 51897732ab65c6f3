"""User-facing messages for every pipeline outcome.

No message ever includes exception text or stack details.
"""

from docubot.bot.schemas import Outcome
from docubot.config import Config
from docubot.constants.slack import BOT_HEADER
from docubot.llm.client import (
    LLMAuthenticationError,
    LLMCreditExhaustedError,
    LLMError,
    LLMRateLimitError,
)
from docubot.slack.blocks import SlackResponse, format_direct


def rate_limited(reset_in: int | None, max_requests: int, window_seconds: int) -> SlackResponse:
    window = "minute" if window_seconds == 60 else f"{window_seconds} seconds"
    return format_direct(
        f"{BOT_HEADER}\n\n⚠️ Rate limit exceeded",
        f"Please wait {reset_in} seconds before asking another question. "
        f"You can ask up to {max_requests} questions per {window}.",
    )


def invalid_input(error: str | None) -> SlackResponse:
    return format_direct(f"{BOT_HEADER}\n\n❌ Invalid question", error)


def no_documentation(config: Config, matched_topic: bool) -> SlackResponse:
    """Nothing to answer from.

    When a topic matched, the pages exist but could not be fetched, so the
    user is told to retry rather than to rephrase.
    """
    if matched_topic:
        return format_direct(
            f"{BOT_HEADER}\n\nI couldn't reach the {config.docs_name} documentation "
            "for your question right now.",
            "The documentation site may be temporarily unavailable. "
            "Please try again in a moment.",
            config.docs_base_url,
        )
    return format_direct(
        f"{BOT_HEADER}\n\nI couldn't find relevant documentation for your question. "
        "Could you try rephrasing it?",
        "Try asking about deployment, configuration, or development topics.",
        config.docs_base_url,
    )


def unexpected_failure() -> SlackResponse:
    return format_direct(
        f"{BOT_HEADER}\n\n❌ Oops! I encountered an error processing your question.",
        "This might be a temporary issue. Please try again in a moment.",
    )


def for_llm_error(error: LLMError) -> tuple[Outcome, SlackResponse]:
    """Map an LLM client failure to its outcome and message."""
    if isinstance(error, LLMAuthenticationError):
        return Outcome.PROVIDER_AUTH_FAILED, format_direct(
            f"{BOT_HEADER}\n\n❌ I couldn't authenticate with the AI service.",
            "The API key is missing or invalid. Ask your workspace admin to check it.",
        )
    if isinstance(error, LLMRateLimitError):
        return Outcome.PROVIDER_RATE_LIMITED, format_direct(
            f"{BOT_HEADER}\n\n⏳ The AI service is receiving too many requests right now.",
            "Please wait a minute and ask again.",
        )
    if isinstance(error, LLMCreditExhaustedError):
        return Outcome.PROVIDER_CREDIT_EXHAUSTED, format_direct(
            f"{BOT_HEADER}\n\n❌ The AI service account has run out of credit.",
            "Ask your workspace admin to top up the AI provider account.",
        )
    return Outcome.PROVIDER_UNAVAILABLE, format_direct(
        f"{BOT_HEADER}\n\n❌ The AI service is temporarily unavailable.",
        "This might be a temporary issue. Please try again in a moment.",
    )
