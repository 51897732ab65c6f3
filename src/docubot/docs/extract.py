"""HTML to plain text extraction for documentation pages."""

import re

from bs4 import BeautifulSoup

# Page chrome that never holds documentation text
_BOILERPLATE_SELECTOR = (
    "nav, footer, header, script, style, noscript, .ad, .sidebar, .navigation, .header"
)

# Containers tried in order; the first one present is used
_CONTENT_SELECTORS = ("main", ".main-content", "article", "body")

_WHITESPACE = re.compile(r"\s+")


def extract_text(html: str) -> str:
    """Reduce an HTML page to its readable main content.

    Navigation, headers, footers and sidebars are removed, then the text of
    the main content container is returned with whitespace collapsed.
    """
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.select(_BOILERPLATE_SELECTOR):
        element.decompose()

    container = None
    for selector in _CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            break

    text = (container or soup).get_text(separator=" ")
    return _WHITESPACE.sub(" ", text).strip()
