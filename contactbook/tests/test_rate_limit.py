from __future__ import annotations

from contactbook.shared.middleware.rate_limit import InMemoryRateLimiter


def test_limiter_blocks_until_window_passes() -> None:
    now = [0.0]
    limiter = InMemoryRateLimiter(2, 10, clock=lambda: now[0])

    assert limiter.allow("ip")
    assert limiter.allow("ip")
    assert not limiter.allow("ip")
    assert limiter.allow("other-ip")

    now[0] = 10.5
    assert limiter.allow("ip")


def test_idle_buckets_are_dropped() -> None:
    now = [0.0]
    limiter = InMemoryRateLimiter(2, 10, clock=lambda: now[0])

    for i in range(500):
        assert limiter.allow(f"10.0.{i // 256}.{i % 256}")
    assert len(limiter._buckets) == 500

    now[0] = 20.0
    assert limiter.allow("10.9.9.9")

    assert list(limiter._buckets) == ["10.9.9.9"]
