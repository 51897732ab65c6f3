"""Keyword to documentation page mapping.

Each topic category pairs a whole-word pattern with the pages that cover the
topic. Categories are checked in table order, so earlier categories win when
the URL cap is reached. Extend the table to add topics; nothing else needs to
change.
"""

import re
from dataclasses import dataclass

from docubot.constants.docs import DEFAULT_DOCS_BASE_URL, GUIDES_BASE_URL, MAX_URLS

DEFAULT_PATH = "{base}guides/"


@dataclass(frozen=True)
class TopicCategory:
    """A documentation topic and the pages fetched when it matches.

    Paths are templates: {guides} expands to the guides root and {base} to the
    configured documentation base URL. Absolute URLs are used as-is.
    """

    name: str
    pattern: re.Pattern[str]
    paths: tuple[str, ...]

    def matches(self, question: str) -> bool:
        return self.pattern.search(question) is not None


def _topic(name: str, keywords: str, *paths: str) -> TopicCategory:
    return TopicCategory(name, re.compile(rf"\b(?:{keywords})\b", re.IGNORECASE), paths)


TOPIC_CATEGORIES: tuple[TopicCategory, ...] = (
    _topic(
        "deployment",
        r"deploy|deployment|undeploy|ci/?cd|cicd|pipeline|credential|rotation|rotate|github",
        "{guides}deployment/deployment",
        "{guides}deployment/ci_cd",
        "{guides}deployment/credential-rotation",
    ),
    _topic(
        "configuration",
        r"config|configuration|app\.config|manifest|env|environment|variables?|hooks?",
        "{guides}configuration/configuration",
        "{guides}configuration/app-hooks",
    ),
    _topic(
        "storage",
        r"database|storage|db|mongodb|persist|state|key-value|aio-lib-db|collection|document",
        "{guides}storage",
        "{guides}storage/database",
    ),
    _topic(
        "logging",
        r"logs?|logging|debug|monitor|troubleshoot|trace",
        "{guides}application_logging",
    ),
    _topic(
        "events",
        r"events?|webhooks?|triggers?|adobe\s+i/o\s+events?",
        "https://developer.adobe.com/app-builder/docs/guides/events/",
    ),
    _topic(
        "security",
        r"security|secure|auth|authentication|credential|token|ims|oauth",
        "https://developer.adobe.com/app-builder/docs/guides/security/",
        "https://developer.adobe.com/app-builder/docs/guides/security/authentication/",
    ),
    _topic(
        "actions",
        r"actions?|functions?|runtime|invoke|serverless|limits?|timeouts?|memory",
        "https://developer.adobe.com/app-builder/docs/guides/actions/",
        "https://developer.adobe.com/runtime/docs/guides/",
    ),
    _topic(
        "extensions",
        r"extensions?|excshell|experience\s+cloud|spa",
        "https://developer.adobe.com/app-builder/docs/guides/extensions/",
    ),
    _topic(
        "overview",
        r"what\s+is|overview|introduction|start|begin|getting\s+started|first\s+app",
        "{base}overview/",
        "{base}getting_started/",
    ),
)


def _expand(path: str, base_url: str) -> str:
    return path.format(guides=GUIDES_BASE_URL, base=base_url)


def matched_categories(
    question: str, categories: tuple[TopicCategory, ...] = TOPIC_CATEGORIES
) -> list[TopicCategory]:
    """Categories whose pattern matches the question, in table order."""
    return [category for category in categories if category.matches(question)]


def build_search_urls(
    question: str,
    base_url: str = DEFAULT_DOCS_BASE_URL,
    max_urls: int = MAX_URLS,
    categories: tuple[TopicCategory, ...] = TOPIC_CATEGORIES,
) -> list[str]:
    """Map a question to at most max_urls documentation URLs.

    Falls back to the general guides page when no category matches.
    Duplicates are dropped keeping the first occurrence.
    """
    urls = [
        _expand(path, base_url)
        for category in matched_categories(question, categories)
        for path in category.paths
    ]
    if not urls:
        urls.append(_expand(DEFAULT_PATH, base_url))

    return list(dict.fromkeys(urls))[:max_urls]
