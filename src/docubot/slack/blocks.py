"""Slack Block Kit messages: building, and parsing LLM output into blocks."""

import re
from typing import Literal, Union

from pydantic import BaseModel, Field

from docubot.constants.slack import (
    BOT_HEADER,
    LINK_TEMPLATE,
    RESPONSE_TYPE_IN_CHANNEL,
    THINKING_TEXT,
    TIP_TEMPLATE,
)

# "💡 Pro tip: ..." up to the end of the line. Tolerates mrkdwn emphasis
# around the label, e.g. "💡 *Pro tip:* ...", and a tip that starts on the
# line after the label.
TIP_PATTERN = re.compile(
    r"💡[^\n]*?pro tip[*_]*:?[*_]*[ \t]*(?:\n[ \t]*)?([^\n]+)", re.IGNORECASE
)

# "📖 ..." followed by a URL, optionally in Slack link form <url|label>.
LINK_PATTERN = re.compile(r"📖[^\n]*?<?(https?://[^\s>|]+)(?:\|[^>\n]*)?>?")


class TextObject(BaseModel):
    """Text element of a block."""

    type: Literal["mrkdwn", "plain_text"] = "mrkdwn"
    text: str


class SectionBlock(BaseModel):
    """Primary text block."""

    type: Literal["section"] = "section"
    text: TextObject


class ContextBlock(BaseModel):
    """Secondary annotation block (tip or source link)."""

    type: Literal["context"] = "context"
    elements: list[TextObject]


Block = Union[SectionBlock, ContextBlock]


class SlackMessage(BaseModel):
    """Message body posted to Slack.

    Either blocks (full answers) or text (lightweight acknowledgment) is set.
    """

    response_type: str = RESPONSE_TYPE_IN_CHANNEL
    blocks: list[Block] | None = None
    text: str | None = None

    def to_payload(self) -> dict:
        """JSON-ready dict with unset fields left out."""
        return self.model_dump(exclude_none=True)


class SlackResponse(BaseModel):
    """Response envelope: status code plus message body."""

    status_code: int = Field(default=200, ge=100, le=599)
    body: SlackMessage

    @property
    def main_text(self) -> str | None:
        """Text of the primary block, or the plain text of an acknowledgment."""
        if self.body.blocks:
            first = self.body.blocks[0]
            if isinstance(first, SectionBlock):
                return first.text.text
        return self.body.text


def _context(text: str) -> ContextBlock:
    return ContextBlock(elements=[TextObject(text=text)])


def _build(answer: str, pro_tip: str | None, learn_more_url: str | None) -> SlackResponse:
    blocks: list[Block] = [SectionBlock(text=TextObject(text=answer))]
    if pro_tip:
        blocks.append(_context(TIP_TEMPLATE.format(tip=pro_tip)))
    if learn_more_url:
        blocks.append(_context(LINK_TEMPLATE.format(url=learn_more_url)))
    return SlackResponse(body=SlackMessage(blocks=blocks))


def format_direct(
    answer: str,
    pro_tip: str | None = None,
    learn_more_url: str | None = None,
) -> SlackResponse:
    """Build a Block Kit response from already separated fields.

    Args:
        answer: Main answer text (mrkdwn).
        pro_tip: Optional tip, shown in a context block.
        learn_more_url: Optional documentation URL, shown after the tip.

    Returns:
        SlackResponse with one section block and up to two context blocks.
    """
    return _build(answer, pro_tip, learn_more_url)


def parse_completion(raw_text: str, default_url: str | None = None) -> SlackResponse:
    """Turn raw LLM output into a Block Kit response.

    The first tip line and the first source link are pulled into their own
    context blocks and every matching span is removed from the main text.
    Without a link in the text, default_url is used.
    """
    tip_match = TIP_PATTERN.search(raw_text)
    pro_tip = tip_match.group(1).strip() if tip_match else None

    link_match = LINK_PATTERN.search(raw_text)
    learn_more_url = link_match.group(1) if link_match else default_url

    main_text = TIP_PATTERN.sub("", raw_text)
    main_text = LINK_PATTERN.sub("", main_text).strip()

    # Slack rejects a section block without text
    return _build(main_text or BOT_HEADER, pro_tip or None, learn_more_url)


def acknowledgment(text: str = THINKING_TEXT) -> SlackResponse:
    """Lightweight in-progress reply sent before the real answer."""
    return SlackResponse(body=SlackMessage(text=text))
