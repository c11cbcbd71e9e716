from datetime import timedelta

from src.attendease.attendease.common.rate_limit import RateLimiter

from tests.fakes import ist


def test_fixed_window_per_key():
    limiter = RateLimiter(limit=2, window_seconds=60)
    t0 = ist(2025, 1, 6, 10, 0)

    assert limiter.allow("attendance:1", now=t0)
    assert limiter.allow("attendance:1", now=t0 + timedelta(seconds=10))
    assert not limiter.allow("attendance:1", now=t0 + timedelta(seconds=20))
    assert limiter.allow("attendance:2", now=t0 + timedelta(seconds=20))


def test_window_resets():
    limiter = RateLimiter(limit=1, window_seconds=60)
    t0 = ist(2025, 1, 6, 10, 0)

    assert limiter.allow("k", now=t0)
    assert not limiter.allow("k", now=t0 + timedelta(seconds=60))
    assert limiter.allow("k", now=t0 + timedelta(seconds=61))
