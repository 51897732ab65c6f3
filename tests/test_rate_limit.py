"""Rate limiter tests."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

from hypothesis import given, settings as hypothesis_settings
from hypothesis import strategies as st

from docubot.security.rate_limit import RateLimiter, RateWindow


def test_first_request_is_allowed(clock):
    """A new identity starts a fresh window."""
    limiter = RateLimiter(window_seconds=60, max_requests=10, clock=clock)

    result = limiter.check("U123")

    assert result.allowed
    assert result.remaining == 9
    assert result.reset_in is None


def test_request_over_limit_is_rejected(clock):
    """The (max+1)-th request in a window is rejected with a reset time."""
    limiter = RateLimiter(window_seconds=60, max_requests=10, clock=clock)

    for _ in range(10):
        assert limiter.check("U123").allowed

    clock.advance(15)
    result = limiter.check("U123")

    assert not result.allowed
    assert result.remaining == 0
    assert result.reset_in == 45


def test_reset_in_rounds_up(clock):
    limiter = RateLimiter(window_seconds=60, max_requests=1, clock=clock)
    limiter.check("U123")

    clock.advance(10.2)
    result = limiter.check("U123")

    assert result.reset_in == 50


def test_window_resets_after_expiry(clock):
    """Once the window has elapsed the identity starts over."""
    limiter = RateLimiter(window_seconds=60, max_requests=2, clock=clock)
    limiter.check("U123")
    limiter.check("U123")
    assert not limiter.check("U123").allowed

    clock.advance(61)
    result = limiter.check("U123")

    assert result.allowed
    assert result.remaining == 1


def test_identities_are_independent(clock):
    limiter = RateLimiter(window_seconds=60, max_requests=1, clock=clock)

    assert limiter.check("U1").allowed
    assert not limiter.check("U1").allowed
    assert limiter.check("U2").allowed


def test_store_is_injectable(clock):
    """Counters live in the store passed at construction."""
    store: dict[str, RateWindow] = {}
    limiter = RateLimiter(window_seconds=60, max_requests=5, store=store, clock=clock)

    limiter.check("U123")
    limiter.check("U123")

    assert store["user_U123"].count == 2


def test_fresh_instances_do_not_share_state(clock):
    first = RateLimiter(window_seconds=60, max_requests=1, clock=clock)
    second = RateLimiter(window_seconds=60, max_requests=1, clock=clock)

    first.check("U123")

    assert second.check("U123").allowed


def test_check_never_raises():
    """A broken clock fails open."""

    def broken_clock() -> float:
        raise RuntimeError("clock unavailable")

    limiter = RateLimiter(window_seconds=60, max_requests=1, clock=broken_clock)

    result = limiter.check("U123")

    assert result.allowed


def test_purge_expired_removes_only_elapsed_windows(clock):
    limiter = RateLimiter(window_seconds=60, max_requests=5, clock=clock)
    limiter.check("old")
    clock.advance(30)
    limiter.check("new")
    clock.advance(31)

    removed = limiter.purge_expired()

    assert removed == 1
    assert len(limiter) == 1


async def test_entry_removed_after_window_elapses():
    """Allowed requests schedule cleanup on the running loop."""
    limiter = RateLimiter(window_seconds=0.05, max_requests=5)

    limiter.check("U123")
    assert len(limiter) == 1

    await asyncio.sleep(0.15)

    assert len(limiter) == 0


async def test_cleanup_keeps_newer_window(clock):
    """A scheduled removal does not delete a window that restarted since."""
    limiter = RateLimiter(window_seconds=60, max_requests=5, clock=clock)
    limiter.check("U123")
    old_start = clock.now

    clock.advance(61)
    limiter.check("U123")
    limiter._expire("user_U123", old_start)

    assert len(limiter) == 1


@given(
    max_requests=st.integers(min_value=1, max_value=20),
    window=st.integers(min_value=1, max_value=600),
    offsets=st.lists(st.floats(min_value=0, max_value=1), min_size=1, max_size=40),
)
@hypothesis_settings(max_examples=50, deadline=None)
def test_at_most_max_requests_allowed_within_a_window(max_requests, window, offsets):
    """Within one window exactly max_requests are allowed, the rest rejected."""
    now = [0.0]
    limiter = RateLimiter(window_seconds=window, max_requests=max_requests, clock=lambda: now[0])

    results = []
    for offset in sorted(offsets):
        now[0] = offset * window
        results.append(limiter.check("U"))

    allowed = [r for r in results if r.allowed]
    rejected = [r for r in results if not r.allowed]
    assert len(allowed) == min(max_requests, len(results))
    assert all(r.reset_in is not None and r.reset_in > 0 for r in rejected)


def test_concurrent_checks_lose_no_updates(clock):
    """Many threads sharing one store see exactly max_requests allowed."""
    store: dict[str, RateWindow] = {}
    limiter = RateLimiter(window_seconds=60, max_requests=25, store=store, clock=clock)

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda _: limiter.check("U"), range(200)))

    assert sum(r.allowed for r in results) == 25
    assert store["user_U"].count == 25
