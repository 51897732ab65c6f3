"""Deferred delivery of answers to a Slack response_url."""

import logging

import httpx

from docubot.constants.docs import DELIVERY_TIMEOUT_SECONDS
from docubot.slack.blocks import SlackResponse

logger = logging.getLogger(__name__)


class ResponseDelivery:
    """Posts messages to the response_url Slack supplies with a command.

    Failures are logged and reported through the return value only. The
    original request has already been answered, so there is nobody to raise to.
    """

    def __init__(
        self,
        timeout: float = DELIVERY_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    async def send(self, response_url: str | None, response: SlackResponse) -> bool:
        """POST the message body to response_url.

        Returns:
            True if Slack accepted the message.
        """
        if not response_url:
            logger.error("No response_url provided, dropping deferred response")
            return False

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                result = await client.post(
                    response_url,
                    json=response.body.to_payload(),
                    headers={"Content-Type": "application/json"},
                )
                result.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to deliver response: {type(e).__name__}: {e}")
            return False

        logger.info("Deferred response delivered")
        return True
