"""LLM client abstraction."""

from docubot.llm.client import (
    LLMAuthenticationError,
    LLMClient,
    LLMCreditExhaustedError,
    LLMError,
    LLMRateLimitError,
    LLMUnavailableError,
)

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMCreditExhaustedError",
    "LLMError",
    "LLMRateLimitError",
    "LLMUnavailableError",
]
