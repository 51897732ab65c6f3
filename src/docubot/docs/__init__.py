"""Documentation retrieval: page selection, fetching and text extraction."""

from docubot.docs.extract import extract_text
from docubot.docs.fetcher import DocFetcher, ScrapeResult
from docubot.docs.mapping import (
    TOPIC_CATEGORIES,
    TopicCategory,
    build_search_urls,
    matched_categories,
)

__all__ = [
    "DocFetcher",
    "ScrapeResult",
    "TOPIC_CATEGORIES",
    "TopicCategory",
    "build_search_urls",
    "extract_text",
    "matched_categories",
]
