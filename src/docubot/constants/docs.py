"""Documentation retrieval configuration.

These settings control which documentation pages are fetched for a question
and how much of their text is passed on to the LLM.
"""

# =============================================================================
# Documentation Source
# =============================================================================
# DEFAULT_DOCS_BASE_URL must end with a slash; category paths are joined onto
# it. GUIDES_BASE_URL is the root of the App Builder guide sections.

DEFAULT_DOCS_BASE_URL = "https://developer.adobe.com/app-builder/docs/"
DEFAULT_DOCS_NAME = "App Builder"
GUIDES_BASE_URL = "https://developer.adobe.com/app-builder/docs/guides/app_builder_guides/"

# =============================================================================
# Retrieval Budget
# =============================================================================
# At most MAX_URLS pages are fetched per question. Each page is cut to
# PER_PAGE_CHAR_LIMIT characters, and the combined text to TOTAL_CHAR_LIMIT
# (roughly 3-4k tokens at 4 characters per token).

MAX_URLS = 3
PER_PAGE_CHAR_LIMIT = 6000
TOTAL_CHAR_LIMIT = 15000
CONTENT_SEPARATOR = "\n\n---\n\n"

# =============================================================================
# HTTP Client
# =============================================================================

FETCH_TIMEOUT_SECONDS = 5.0
MAX_REDIRECTS = 5
USER_AGENT = "DocuBot/1.0"

# Bytes read from one page before the rest of the body is discarded
MAX_PAGE_BYTES = 2_000_000
DELIVERY_TIMEOUT_SECONDS = 10.0
