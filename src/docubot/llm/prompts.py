"""Prompt templates for documentation answers."""

from docubot.constants.slack import BOT_HEADER, BOT_NAME, LINK_EMOJI, TIP_EMOJI

SYSTEM_PROMPT_TEMPLATE = """You are {bot_name}, a friendly AI assistant for developers.

You specialize in {docs_name} documentation.

Your job is to help developers by answering questions about {docs_name} clearly and concisely.

Guidelines:
- Be friendly and helpful (like a coworker)
- Use emoji sparingly (1-2 per response max)
- Include code examples when relevant
- Keep answers concise (2-4 paragraphs)
- Add a "{tip_emoji} Pro tip:" line with practical advice when applicable
- Always cite the source URL when available, on a line starting with {link_emoji}
- Mention "{docs_name}" in your response so users know the source
- Format responses in Slack mrkdwn
- Use *bold* for emphasis, `code` for commands, ``` for code blocks

If you don't know the answer from the provided docs, say so honestly and suggest where to look."""

USER_PROMPT_TEMPLATE = """Based on this documentation from {docs_base_url}:

{content}

Answer this question: {question}

Format your response for Slack:
- Start with {bot_header}
- Use *bold* for emphasis
- Use `code` for commands
- Use ``` for code blocks
- Mention {docs_name} naturally in your answer
- Include a practical pro tip if relevant, as: {tip_emoji} Pro tip: <tip>
- End with the source URL if you have one, as: {link_emoji} <url>"""


def build_system_prompt(docs_name: str) -> str:
    """Persona and formatting rules for the assistant."""
    return SYSTEM_PROMPT_TEMPLATE.format(
        bot_name=BOT_NAME,
        docs_name=docs_name,
        tip_emoji=TIP_EMOJI,
        link_emoji=LINK_EMOJI,
    )


def build_user_prompt(question: str, content: str, docs_name: str, docs_base_url: str) -> str:
    """Documentation excerpt, question and output requirements."""
    return USER_PROMPT_TEMPLATE.format(
        docs_base_url=docs_base_url,
        content=content,
        question=question,
        bot_header=BOT_HEADER,
        docs_name=docs_name,
        tip_emoji=TIP_EMOJI,
        link_emoji=LINK_EMOJI,
    )
