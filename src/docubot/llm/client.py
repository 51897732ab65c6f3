"""LiteLLM-based completion client."""

import logging
import time

from litellm import acompletion
from litellm.exceptions import (
    APIConnectionError,
    APIError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServiceUnavailableError,
    Timeout,
)

from docubot.constants.llm import (
    COMPLETION_TIMEOUT_SECONDS,
    CREDIT_ERROR_PHRASES,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    MAX_TOKENS,
)
from docubot.llm.prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base exception for LLM client errors."""

    pass


class LLMAuthenticationError(LLMError):
    """Raised when no API key is configured or the provider rejects it."""

    pass


class LLMRateLimitError(LLMError):
    """Raised when rate limited by the LLM provider."""

    pass


class LLMCreditExhaustedError(LLMError):
    """Raised when the provider account has run out of credit."""

    pass


class LLMUnavailableError(LLMError):
    """Raised for any other provider-side or connection failure."""

    pass


_UNAVAILABLE_ERRORS = (
    APIConnectionError,
    APIError,
    Timeout,
    ServiceUnavailableError,
    InternalServerError,
    NotFoundError,
    PermissionDeniedError,
)


def is_credit_error(message: str) -> bool:
    """Whether a 400 error message is about account credit or billing."""
    lower = message.lower()
    return any(phrase in lower for phrase in CREDIT_ERROR_PHRASES)


class LLMClient:
    """Completion client for a single provider via LiteLLM.

    Makes exactly one attempt per call; retrying is left to the caller.
    """

    def __init__(
        self,
        provider: str = DEFAULT_PROVIDER,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = COMPLETION_TIMEOUT_SECONDS,
    ):
        """Initialize LLM client.

        Args:
            provider: LLM provider (groq, openai, anthropic, ...).
            model: Model name.
            api_key: Provider API key. Calls fail with LLMAuthenticationError without one.
            max_tokens: Maximum response tokens.
            temperature: Sampling temperature.
            timeout: Request timeout in seconds.
        """
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    def _get_model_string(self) -> str:
        """Get LiteLLM model string.

        Returns:
            Model string in provider/model format.
        """
        if self.provider == "openai":
            return self.model  # OpenAI is default
        return f"{self.provider}/{self.model}"

    @staticmethod
    def _error_details(e: Exception) -> str:
        status = getattr(e, "status_code", None)
        provider = getattr(e, "llm_provider", None)
        return f"status={status} provider={provider}"

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate a completion from a prompt.

        Args:
            prompt: User prompt.
            system_prompt: Optional system prompt.

        Returns:
            Generated text response.

        Raises:
            LLMAuthenticationError: No API key, or the key was rejected (401).
            LLMRateLimitError: The provider throttled the request (429).
            LLMCreditExhaustedError: The account is out of credit (400).
            LLMUnavailableError: Any other provider failure.
        """
        if not self.api_key:
            raise LLMAuthenticationError(f"No API key configured for provider {self.provider}")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": self._get_model_string(),
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "api_key": self.api_key,
            "timeout": self.timeout,
            "num_retries": 0,
        }

        start_time = time.perf_counter()
        try:
            response = await acompletion(**kwargs)
        except AuthenticationError as e:
            logger.error(f"LLM authentication failed ({self._error_details(e)})")
            raise LLMAuthenticationError(f"Authentication failed: {e}") from e
        except RateLimitError as e:
            logger.warning(f"LLM rate limit hit ({self._error_details(e)})")
            raise LLMRateLimitError(f"Rate limit exceeded: {e}") from e
        except BadRequestError as e:
            logger.error(f"LLM rejected request ({self._error_details(e)}): {e}")
            if is_credit_error(str(e)):
                raise LLMCreditExhaustedError(f"Credit exhausted: {e}") from e
            raise LLMUnavailableError(f"LLM request rejected: {e}") from e
        except _UNAVAILABLE_ERRORS as e:
            logger.error(f"LLM unavailable ({self._error_details(e)}): {e}")
            raise LLMUnavailableError(f"LLM API error: {e}") from e

        result = str(response.choices[0].message.content or "")
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"LLM {self._get_model_string()} answered in {duration_ms}ms")
        return result

    async def complete(
        self,
        question: str,
        content: str,
        docs_name: str,
        docs_base_url: str,
    ) -> str:
        """Answer a question from documentation content.

        Returns the raw completion text, expected to loosely follow the
        requested Slack formatting.
        """
        return await self.generate(
            build_user_prompt(question, content, docs_name, docs_base_url),
            system_prompt=build_system_prompt(docs_name),
        )
