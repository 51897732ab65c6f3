"""LLM client configuration.

Default parameters for completion calls. Answers are short Slack messages,
so MAX_TOKENS is far below what the provider allows.
"""

DEFAULT_PROVIDER = "groq"
DEFAULT_MODEL = "llama-3.3-70b-versatile"

MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.7
COMPLETION_TIMEOUT_SECONDS = 30.0

# Phrases in a 400 response that mean the account is out of credit rather
# than the request being malformed.
CREDIT_ERROR_PHRASES = ("credit", "billing", "quota", "insufficient", "balance")
