"""Question handling pipeline.

A question goes through rate limiting, validation and the cost fast path
synchronously. Anything else is acknowledged at once and answered later by a
deferred job: fetch documentation, ask the LLM, format, and deliver to the
caller's response_url. The deferred job delivers exactly one message.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from docubot.bot import messages
from docubot.bot.schemas import AskRequest, Outcome
from docubot.config import Config
from docubot.constants.slack import BOT_NAME
from docubot.cost.calculator import calculate_cost, is_cost_question
from docubot.docs.fetcher import DocFetcher
from docubot.llm.client import LLMClient, LLMError
from docubot.security.masking import mask_params
from docubot.security.rate_limit import RateLimiter
from docubot.security.validation import validate_input
from docubot.slack.blocks import SlackResponse, acknowledgment, format_direct, parse_completion
from docubot.slack.delivery import ResponseDelivery

logger = logging.getLogger(__name__)

DeferredJob = Callable[[], Awaitable[Outcome]]
LLMFactory = Callable[[Config], LLMClient]


@dataclass
class AskResult:
    """What to send back right away, plus the deferred job if there is one."""

    outcome: Outcome
    response: SlackResponse
    deferred: DeferredJob | None = None


def default_llm_factory(config: Config) -> LLMClient:
    """LLM client for one request's configuration."""
    return LLMClient(
        provider=config.llm_provider,
        model=config.llm_model,
        api_key=config.llm_api_key,
        max_tokens=config.llm.max_tokens,
        temperature=config.llm.temperature,
        timeout=config.llm.timeout,
    )


class DocuBot:
    """Entry point for questions.

    Holds the collaborators shared across requests. Per-request configuration
    is derived from settings plus the request's overrides and passed down
    explicitly; settings are never modified.
    """

    def __init__(
        self,
        settings: Config,
        rate_limiter: RateLimiter | None = None,
        fetcher: DocFetcher | None = None,
        delivery: ResponseDelivery | None = None,
        llm_factory: LLMFactory = default_llm_factory,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Process-wide configuration.
            rate_limiter: Shared rate limiter; one is created from settings if omitted.
            fetcher: Documentation fetcher; created from settings if omitted.
            delivery: Deferred response sender; created from settings if omitted.
            llm_factory: Builds an LLM client from a request's configuration.
        """
        self.settings = settings
        self.rate_limiter = rate_limiter or RateLimiter(
            window_seconds=settings.rate_limit.window_seconds,
            max_requests=settings.rate_limit.max_requests,
        )
        self.fetcher = fetcher or DocFetcher(
            timeout=settings.docs.fetch_timeout,
            per_page_chars=settings.docs.per_page_chars,
            total_chars=settings.docs.total_chars,
            max_urls=settings.docs.max_urls,
            max_redirects=settings.docs.max_redirects,
            max_page_bytes=settings.docs.max_page_bytes,
        )
        self.delivery = delivery or ResponseDelivery(timeout=settings.delivery.timeout)
        self._llm_factory = llm_factory

    async def handle(self, request: AskRequest) -> AskResult:
        """Handle a question up to the point where it can be answered.

        Rate-limited, invalid and cost questions are answered here. Other
        questions get an acknowledgment and a deferred job that the caller
        must schedule without awaiting it on the response path.
        """
        logger.info(f"{BOT_NAME} received request: {mask_params(request.log_params())}")
        try:
            config = self.settings.with_overrides(**request.overrides.as_kwargs())

            rate = self.rate_limiter.check(request.user_id)
            if not rate.allowed:
                logger.info(f"Rate limit exceeded for {request.user_id}, reset in {rate.reset_in}s")
                return AskResult(
                    Outcome.RATE_LIMITED,
                    messages.rate_limited(
                        rate.reset_in,
                        self.rate_limiter.max_requests,
                        self.rate_limiter.window_seconds,
                    ),
                )

            validation = validate_input(request.text, config.validation.max_question_length)
            if not validation.valid:
                logger.info(f"Rejected question: {validation.error}")
                return AskResult(Outcome.INVALID_INPUT, messages.invalid_input(validation.error))

            question = validation.sanitized
            logger.info(f"Question (sanitized): {question}")
            logger.info(f"Rate limit remaining: {rate.remaining} requests")

            if is_cost_question(question):
                logger.info("Detected cost calculation question")
                cost = calculate_cost(question)
                return AskResult(
                    Outcome.COST_ANSWERED,
                    format_direct(cost.answer, cost.pro_tip, cost.learn_more_url),
                )

            job = functools.partial(
                self.process_and_respond, question, request.response_url, config
            )
            return AskResult(Outcome.ACKNOWLEDGED, acknowledgment(), deferred=job)
        except Exception:
            logger.exception("Error handling request")
            return AskResult(Outcome.UNEXPECTED_FAILURE, messages.unexpected_failure())

    async def process_and_respond(
        self, question: str, response_url: str | None, config: Config
    ) -> Outcome:
        """Answer a question and deliver the result to response_url.

        Every branch ends in exactly one delivery attempt.
        """
        start_time = time.perf_counter()
        try:
            outcome, response = await self.answer(question, config)
        except Exception:
            logger.exception("Error processing question")
            outcome, response = Outcome.UNEXPECTED_FAILURE, messages.unexpected_failure()

        try:
            await self.delivery.send(response_url, response)
        except Exception:
            logger.exception("Error delivering response")

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"Request completed in {duration_ms}ms ({outcome.value})")
        return outcome

    async def answer(self, question: str, config: Config) -> tuple[Outcome, SlackResponse]:
        """Fetch documentation and ask the LLM. Does not deliver anything."""
        logger.info("Scraping documentation...")
        scrape = await self.fetcher.scrape(question, base_url=config.docs_base_url)
        if scrape.content is None:
            logger.info(f"No documentation content (topic matched: {scrape.matched_topic})")
            return Outcome.NO_DOCUMENTATION_FOUND, messages.no_documentation(
                config, scrape.matched_topic
            )

        logger.info("Getting AI response...")
        llm = self._llm_factory(config)
        try:
            raw = await llm.complete(
                question, scrape.content, config.docs_name, config.docs_base_url
            )
        except LLMError as e:
            logger.error(f"Completion failed: {type(e).__name__}")
            return messages.for_llm_error(e)

        return Outcome.ANSWERED, parse_completion(raw, default_url=config.docs_base_url)


_background_jobs: set[asyncio.Task] = set()


def spawn(result: AskResult) -> asyncio.Task | None:
    """Run a result's deferred job in the background on the current loop.

    For callers that do not have a web framework's background task support.
    A reference is held until the job finishes so it is not garbage collected.
    """
    if result.deferred is None:
        return None
    task = asyncio.create_task(result.deferred())
    _background_jobs.add(task)
    task.add_done_callback(_background_jobs.discard)
    return task
