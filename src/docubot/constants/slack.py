"""Slack message configuration.

Fixed text fragments used to build Block Kit messages and to recognise the
annotations the LLM is asked to include in its answers.
"""

BOT_NAME = "DocuBot"
BOT_HEADER = f"🤖 *{BOT_NAME}*"
THINKING_TEXT = f"🤖 *{BOT_NAME} is thinking...* 🔍"

TIP_EMOJI = "💡"
LINK_EMOJI = "📖"
TIP_TEMPLATE = TIP_EMOJI + " *Pro tip:* {tip}"
LINK_TEMPLATE = LINK_EMOJI + " <{url}|Learn more>"

RESPONSE_TYPE_IN_CHANNEL = "in_channel"
