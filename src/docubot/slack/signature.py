"""Slack request signature verification (v0 signing scheme)."""

import hashlib
import hmac
import time

from docubot.constants.security import SIGNATURE_TOLERANCE_SECONDS

SIGNATURE_VERSION = "v0"


def compute_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """Signature Slack sends in X-Slack-Signature for this request."""
    base = f"{SIGNATURE_VERSION}:{timestamp}:".encode() + body
    digest = hmac.new(signing_secret.encode(), base, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def verify_slack_signature(
    signing_secret: str,
    timestamp: str | None,
    body: bytes,
    signature: str | None,
    now: float | None = None,
    tolerance: int = SIGNATURE_TOLERANCE_SECONDS,
) -> bool:
    """Check a request's X-Slack-Signature and reject stale timestamps."""
    if not timestamp or not signature:
        return False
    try:
        sent_at = int(timestamp)
    except ValueError:
        return False

    current = time.time() if now is None else now
    if abs(current - sent_at) > tolerance:
        return False

    expected = compute_signature(signing_secret, timestamp, body)
    return hmac.compare_digest(expected, signature)
