"""DocuBot: documentation Q&A for Slack, backed by page retrieval and an LLM."""

__version__ = "0.1.0"
