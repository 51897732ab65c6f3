"""Request screening configuration.

Limits applied to every inbound question before any retrieval or completion
work is started.
"""

# =============================================================================
# Rate Limiting
# =============================================================================
# Each identity may ask RATE_LIMIT_MAX_REQUESTS questions per window. Requests
# over the limit are rejected, never queued. Requests without a user id share
# the ANONYMOUS_USER bucket.

RATE_LIMIT_WINDOW_SECONDS = 60
RATE_LIMIT_MAX_REQUESTS = 10
ANONYMOUS_USER = "anonymous"

# =============================================================================
# Input Validation
# =============================================================================
# Questions longer than this (after trimming) are rejected outright.

MAX_QUESTION_LENGTH = 500

# =============================================================================
# Log Redaction
# =============================================================================
# Request parameters whose values are credentials. Values longer than
# MASK_KEEP_CHARS * 2 keep their first and last MASK_KEEP_CHARS characters.

SENSITIVE_PARAM_KEYS = (
    "GROQ_API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "SLACK_BOT_TOKEN",
    "SLACK_SIGNING_SECRET",
    "AIO_runtime_auth",
)
MASK_KEEP_CHARS = 4
MASK_PLACEHOLDER = "***MASKED***"

# =============================================================================
# Slack Request Signing
# =============================================================================
# Signed requests older than this are treated as replays.

SIGNATURE_TOLERANCE_SECONDS = 300
