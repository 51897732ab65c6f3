"""Inbound request and pipeline outcome types."""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from docubot.constants.security import ANONYMOUS_USER


class Outcome(str, Enum):
    """Terminal result of handling a question.

    ACKNOWLEDGED is the synchronous result when the answer is delivered later;
    the deferred job then ends in one of the other outcomes.
    """

    COST_ANSWERED = "cost_answered"
    ACKNOWLEDGED = "acknowledged"
    ANSWERED = "answered"
    RATE_LIMITED = "rate_limited"
    INVALID_INPUT = "invalid_input"
    NO_DOCUMENTATION_FOUND = "no_documentation_found"
    PROVIDER_AUTH_FAILED = "provider_auth_failed"
    PROVIDER_RATE_LIMITED = "provider_rate_limited"
    PROVIDER_CREDIT_EXHAUSTED = "provider_credit_exhausted"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    UNEXPECTED_FAILURE = "unexpected_failure"


class RequestOverrides(BaseModel):
    """Per-request configuration supplied by the caller.

    Field aliases match the environment variable names so overrides can be
    passed in the same shape as the process configuration.
    """

    model_config = ConfigDict(populate_by_name=True)

    groq_api_key: str | None = Field(None, alias="GROQ_API_KEY")
    docs_base_url: str | None = Field(None, alias="DOCS_BASE_URL")
    docs_name: str | None = Field(None, alias="DOCS_NAME")
    slack_bot_token: str | None = Field(None, alias="SLACK_BOT_TOKEN")
    slack_signing_secret: str | None = Field(None, alias="SLACK_SIGNING_SECRET")

    def as_kwargs(self) -> dict[str, str | None]:
        """Values keyed by field name, for Config.with_overrides()."""
        return self.model_dump()


class AskRequest(BaseModel):
    """A question from Slack or a direct API caller."""

    user_id: str = Field(default=ANONYMOUS_USER, description="Identity used for rate limiting")
    text: str = Field(
        default="",
        validation_alias=AliasChoices("text", "question"),
        description="The question text",
    )
    response_url: str | None = Field(None, description="Where to deliver the deferred answer")
    overrides: RequestOverrides = Field(default_factory=RequestOverrides)

    def log_params(self) -> dict[str, Any]:
        """Flat view of the request for logging; pass through mask_params()."""
        params: dict[str, Any] = {
            "user_id": self.user_id,
            "text": self.text,
            "response_url": self.response_url,
        }
        params.update(self.overrides.model_dump(by_alias=True, exclude_none=True))
        return params
