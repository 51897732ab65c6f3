"""Slack message formatting, delivery and request verification."""

from docubot.slack.blocks import (
    ContextBlock,
    SectionBlock,
    SlackMessage,
    SlackResponse,
    TextObject,
    acknowledgment,
    format_direct,
    parse_completion,
)
from docubot.slack.delivery import ResponseDelivery
from docubot.slack.signature import compute_signature, verify_slack_signature

__all__ = [
    "ContextBlock",
    "ResponseDelivery",
    "SectionBlock",
    "SlackMessage",
    "SlackResponse",
    "TextObject",
    "acknowledgment",
    "compute_signature",
    "format_direct",
    "parse_completion",
    "verify_slack_signature",
]
