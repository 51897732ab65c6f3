"""Documentation fetcher with per-page and total text budgets."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

import httpx

from docubot.constants.docs import (
    CONTENT_SEPARATOR,
    DEFAULT_DOCS_BASE_URL,
    FETCH_TIMEOUT_SECONDS,
    MAX_PAGE_BYTES,
    MAX_REDIRECTS,
    MAX_URLS,
    PER_PAGE_CHAR_LIMIT,
    TOTAL_CHAR_LIMIT,
    USER_AGENT,
)
from docubot.docs.extract import extract_text
from docubot.docs.mapping import build_search_urls, matched_categories

logger = logging.getLogger(__name__)


@dataclass
class ScrapeResult:
    """Pages selected for a question and the text gathered from them.

    content is None when every page failed or returned no text.
    """

    urls: list[str]
    categories: list[str] = field(default_factory=list)
    content: str | None = None

    @property
    def matched_topic(self) -> bool:
        """Whether any topic category matched (False means the default page was used)."""
        return bool(self.categories)


class DocFetcher:
    """Fetches documentation pages concurrently and combines their text."""

    def __init__(
        self,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        per_page_chars: int = PER_PAGE_CHAR_LIMIT,
        total_chars: int = TOTAL_CHAR_LIMIT,
        max_urls: int = MAX_URLS,
        max_redirects: int = MAX_REDIRECTS,
        user_agent: str = USER_AGENT,
        max_page_bytes: int = MAX_PAGE_BYTES,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Per-page request timeout in seconds.
            per_page_chars: Maximum characters kept from one page.
            total_chars: Maximum characters of combined text.
            max_urls: Maximum pages fetched per question.
            max_redirects: Redirects followed per page.
            user_agent: User-Agent header sent with every request.
            max_page_bytes: Bytes of a response body read before the rest is dropped.
            transport: Optional httpx transport (used by tests).
        """
        self.timeout = timeout
        self.per_page_chars = per_page_chars
        self.total_chars = total_chars
        self.max_urls = max_urls
        self.max_redirects = max_redirects
        self.user_agent = user_agent
        self.max_page_bytes = max_page_bytes
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def fetch_page(self, client: httpx.AsyncClient, url: str) -> str | None:
        """Fetch one page and return its text, prefixed with the source URL.

        Returns None on any HTTP failure or when the page has no text.
        """
        logger.info(f"Fetching docs from: {url}")
        try:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                body = await self._read_body(response, url)
                encoding = response.charset_encoding or "utf-8"
        except httpx.HTTPError as e:
            logger.warning(f"Error fetching {url}: {type(e).__name__}: {e}")
            return None

        # BeautifulSoup parsing blocks; run it off the event loop
        html = body.decode(encoding, errors="replace")
        text = await asyncio.to_thread(extract_text, html)
        if not text:
            logger.warning(f"No readable content at {url}")
            return None

        return f"Source: {url}\n\n{text}"[: self.per_page_chars]

    async def _read_body(self, response: httpx.Response, url: str) -> bytes:
        chunks: list[bytes] = []
        size = 0
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
            size += len(chunk)
            if size > self.max_page_bytes:
                logger.warning(f"Page {url} exceeds {self.max_page_bytes} bytes, truncating")
                break
        return b"".join(chunks)[: self.max_page_bytes]

    async def fetch(self, urls: list[str]) -> str | None:
        """Fetch all URLs concurrently and combine their text.

        A failing page never affects the others. Returns None when no page
        produced any text.
        """
        if not urls:
            return None

        start = time.perf_counter()
        async with self._client() as client:
            pages = await asyncio.gather(*(self.fetch_page(client, url) for url in urls))

        combined = CONTENT_SEPARATOR.join(page for page in pages if page)[: self.total_chars]
        duration_ms = int((time.perf_counter() - start) * 1000)
        fetched = sum(1 for page in pages if page)
        logger.info(
            f"Fetched {fetched}/{len(urls)} pages ({len(combined)} chars) in {duration_ms}ms"
        )
        return combined or None

    async def scrape(self, question: str, base_url: str = DEFAULT_DOCS_BASE_URL) -> ScrapeResult:
        """Select pages for a question and fetch them."""
        categories = [category.name for category in matched_categories(question)]
        urls = build_search_urls(question, base_url=base_url, max_urls=self.max_urls)
        logger.info(f"Topics {categories or ['default']} -> {urls}")
        content = await self.fetch(urls)
        return ScrapeResult(urls=urls, categories=categories, content=content)
