"""Block Kit formatting and LLM output parsing tests."""

from docubot.constants.slack import BOT_HEADER, THINKING_TEXT
from docubot.slack.blocks import (
    ContextBlock,
    SectionBlock,
    acknowledgment,
    format_direct,
    parse_completion,
)


def context_texts(response) -> list[str]:
    return [
        block.elements[0].text
        for block in response.body.blocks
        if isinstance(block, ContextBlock)
    ]


def test_format_direct_with_all_fields():
    response = format_direct("Answer", "Be brief", "https://docs.example.com/")

    assert response.status_code == 200
    assert response.body.response_type == "in_channel"
    assert isinstance(response.body.blocks[0], SectionBlock)
    assert response.main_text == "Answer"
    assert context_texts(response) == [
        "💡 *Pro tip:* Be brief",
        "📖 <https://docs.example.com/|Learn more>",
    ]


def test_format_direct_omits_missing_parts():
    response = format_direct("Answer only")

    assert len(response.body.blocks) == 1
    assert context_texts(response) == []


def test_format_direct_link_without_tip():
    response = format_direct("Answer", learn_more_url="https://docs.example.com/")

    assert context_texts(response) == ["📖 <https://docs.example.com/|Learn more>"]


def test_payload_matches_block_kit_shape():
    payload = format_direct("Answer", "Tip").body.to_payload()

    assert payload == {
        "response_type": "in_channel",
        "blocks": [
            {"type": "section", "text": {"type": "mrkdwn", "text": "Answer"}},
            {"type": "context", "elements": [{"type": "mrkdwn", "text": "💡 *Pro tip:* Tip"}]},
        ],
    }


def test_acknowledgment_is_plain_text():
    response = acknowledgment()

    assert response.body.to_payload() == {"response_type": "in_channel", "text": THINKING_TEXT}
    assert response.main_text == THINKING_TEXT


def test_parse_completion_extracts_tip_and_link():
    raw = (
        "🤖 *DocuBot*\n\nUse `aio app deploy`.\n\n"
        "💡 Pro tip: Test locally first.\n"
        "📖 https://developer.adobe.com/app-builder/docs/guides/deployment/"
    )

    response = parse_completion(raw)

    assert response.main_text == "🤖 *DocuBot*\n\nUse `aio app deploy`."
    assert context_texts(response) == [
        "💡 *Pro tip:* Test locally first.",
        "📖 <https://developer.adobe.com/app-builder/docs/guides/deployment/|Learn more>",
    ]


def test_parse_completion_handles_emphasis_and_slack_links():
    raw = (
        "Body text\n"
        "💡 *Pro tip:* Cache results.\n"
        "📖 <https://docs.example.com/page|Docs>"
    )

    response = parse_completion(raw)

    assert response.main_text == "Body text"
    assert context_texts(response) == [
        "💡 *Pro tip:* Cache results.",
        "📖 <https://docs.example.com/page|Learn more>",
    ]


def test_parse_completion_tip_on_following_line():
    raw = "Body text\n💡 *Pro tip:*\nRun locally first.\n📖 https://docs.example.com/"

    response = parse_completion(raw)

    assert response.main_text == "Body text"
    assert context_texts(response)[0] == "💡 *Pro tip:* Run locally first."


def test_parse_completion_uses_default_url():
    response = parse_completion("Plain answer", default_url="https://docs.example.com/")

    assert response.main_text == "Plain answer"
    assert context_texts(response) == ["📖 <https://docs.example.com/|Learn more>"]


def test_parse_completion_without_annotations_or_default():
    response = parse_completion("Plain answer")

    assert len(response.body.blocks) == 1


def test_parse_completion_never_produces_empty_section():
    response = parse_completion("💡 Pro tip: Only a tip\n📖 https://docs.example.com/")

    assert response.main_text == BOT_HEADER
    assert context_texts(response)[0] == "💡 *Pro tip:* Only a tip"


def test_formatted_message_parses_back():
    original = format_direct("Main answer", "A tip", "https://docs.example.com/x")
    rendered = "\n".join(
        [original.main_text, *context_texts(original)]
    )

    parsed = parse_completion(rendered)

    assert parsed.body.to_payload() == original.body.to_payload()
