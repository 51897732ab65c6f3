"""Per-user sliding window rate limiter."""

from __future__ import annotations

import asyncio
import logging
import math
import threading
import time
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass

from docubot.constants.security import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class RateWindow:
    """Request count for one identity within the current window."""

    count: int
    window_start: float


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate limit check.

    reset_in is the number of whole seconds until the window reopens; it is
    only set when the request was rejected.
    """

    allowed: bool
    remaining: int
    reset_in: int | None = None


class RateLimiter:
    """In-memory rate limiter keyed by user identity.

    The window store is passed in (or created fresh) so that tests and
    multiple app instances never share counters by accident. All reads and
    writes of the store happen under one lock.
    """

    def __init__(
        self,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        store: MutableMapping[str, RateWindow] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            window_seconds: Length of a rate limit window.
            max_requests: Requests allowed per identity per window.
            store: Optional mapping of key -> RateWindow to use as state.
            clock: Monotonic time source, in seconds.
        """
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._store: MutableMapping[str, RateWindow] = store if store is not None else {}
        self._clock = clock
        self._lock = threading.Lock()

    @staticmethod
    def _key(identity: str) -> str:
        return f"user_{identity}"

    def check(self, identity: str) -> RateLimitResult:
        """Count a request for identity and report whether it may proceed.

        Never raises. If the counter cannot be evaluated the request is allowed.
        """
        try:
            return self._check(identity)
        except Exception:
            logger.exception("Rate limit check failed, allowing request")
            return RateLimitResult(allowed=True, remaining=self.max_requests)

    def _check(self, identity: str) -> RateLimitResult:
        key = self._key(identity)
        with self._lock:
            now = self._clock()
            window = self._store.get(key)

            if window is None or now - window.window_start > self.window_seconds:
                window = RateWindow(count=0, window_start=now)
                self._store[key] = window

            if window.count >= self.max_requests:
                elapsed = now - window.window_start
                reset_in = max(1, math.ceil(self.window_seconds - elapsed))
                return RateLimitResult(allowed=False, remaining=0, reset_in=reset_in)

            window.count += 1
            remaining = self.max_requests - window.count
            window_start = window.window_start

        self._schedule_cleanup(key, window_start)
        return RateLimitResult(allowed=True, remaining=remaining)

    def _schedule_cleanup(self, key: str, window_start: float) -> None:
        """Drop the entry once its window has elapsed.

        Only possible when called from a running event loop; otherwise expired
        entries are superseded on next access or removed by purge_expired().
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        loop.call_later(self.window_seconds, self._expire, key, window_start)

    def _expire(self, key: str, window_start: float) -> None:
        with self._lock:
            window = self._store.get(key)
            # A newer window started after this removal was scheduled
            if window is not None and window.window_start == window_start:
                del self._store[key]

    def purge_expired(self) -> int:
        """Remove all windows that have elapsed.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            now = self._clock()
            expired = [
                key
                for key, window in self._store.items()
                if now - window.window_start > self.window_seconds
            ]
            for key in expired:
                del self._store[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
