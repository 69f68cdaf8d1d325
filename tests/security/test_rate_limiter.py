"""
Unit Tests: Fixed-Window Rate Limiter

Tests for middleware/rate_limit.py covering:
- window counting, blocking and lazy reset
- independent counters per client IP
- periodic cleanup of expired entries
- fail-open on internal errors
- client IP precedence and response headers
"""

from unittest.mock import MagicMock

import pytest

from enums.rate_limit_operation import RateLimitOperation
from middleware.rate_limit import (
    FixedWindowRateLimiter,
    RateLimitResult,
    get_client_ip,
    rate_limit_headers,
    retry_after_seconds,
)

OP = RateLimitOperation.GET_TOTAL


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return FixedWindowRateLimiter(clock=clock)


class TestFixedWindow:

    def test_allows_up_to_max_then_blocks(self, limiter, clock):
        results = [limiter.check(OP, "1.1.1.1", max_requests=3, window_ms=60_000) for _ in range(4)]

        assert [r.allowed for r in results] == [True, True, True, False]
        assert [r.remaining for r in results] == [2, 1, 0, 0]
        assert results[-1].reset_time == clock.now + 60_000

    def test_window_resets_lazily_after_reset_time(self, limiter, clock):
        for _ in range(3):
            limiter.check(OP, "1.1.1.1", max_requests=3, window_ms=60_000)
        assert not limiter.check(OP, "1.1.1.1", max_requests=3, window_ms=60_000).allowed

        clock.now += 60_001
        result = limiter.check(OP, "1.1.1.1", max_requests=3, window_ms=60_000)

        assert result.allowed
        assert result.remaining == 2
        assert result.reset_time == clock.now + 60_000

    def test_still_blocked_exactly_at_reset_time(self, limiter, clock):
        limiter.check(OP, "1.1.1.1", max_requests=1, window_ms=1000)
        clock.now += 1000

        assert not limiter.check(OP, "1.1.1.1", max_requests=1, window_ms=1000).allowed

    def test_counters_are_per_ip(self, limiter):
        limiter.check(OP, "1.1.1.1", max_requests=1, window_ms=60_000)

        assert not limiter.check(OP, "1.1.1.1", max_requests=1, window_ms=60_000).allowed
        assert limiter.check(OP, "2.2.2.2", max_requests=1, window_ms=60_000).allowed

    def test_reset_clears_counter(self, limiter):
        limiter.check(OP, "1.1.1.1", max_requests=1, window_ms=60_000)

        limiter.reset(OP, "1.1.1.1")

        assert limiter.check(OP, "1.1.1.1", max_requests=1, window_ms=60_000).allowed

    def test_cleanup_sweeps_expired_entries_at_most_once_a_minute(self, limiter, clock):
        limiter.check(OP, "1.1.1.1", max_requests=5, window_ms=1000)
        limiter.check(OP, "2.2.2.2", max_requests=5, window_ms=1000)

        clock.now += 30_000
        limiter.check(OP, "3.3.3.3", max_requests=5, window_ms=1000)
        assert len(limiter) == 3

        clock.now += 30_000
        limiter.check(OP, "3.3.3.3", max_requests=5, window_ms=1000)
        assert len(limiter) == 1

    def test_fails_open_on_internal_error(self):
        broken_clock = MagicMock(side_effect=[0, RuntimeError("clock broke")])
        limiter = FixedWindowRateLimiter(clock=broken_clock)

        result = limiter.check(OP, "1.1.1.1", max_requests=3, window_ms=60_000)

        assert result.allowed
        assert result.remaining == 3


class TestClientIp:

    def _request(self, headers: dict[str, str]):
        request = MagicMock()
        request.headers = headers
        return request

    def test_cloudflare_header_wins(self):
        request = self._request({
            "cf-connecting-ip": "9.9.9.9",
            "x-forwarded-for": "8.8.8.8, 10.0.0.1",
            "x-real-ip": "7.7.7.7",
        })

        assert get_client_ip(request) == "9.9.9.9"

    def test_first_forwarded_hop(self):
        request = self._request({"x-forwarded-for": " 8.8.8.8 , 10.0.0.1", "x-real-ip": "7.7.7.7"})

        assert get_client_ip(request) == "8.8.8.8"

    def test_real_ip(self):
        assert get_client_ip(self._request({"x-real-ip": "7.7.7.7"})) == "7.7.7.7"

    def test_unknown(self):
        assert get_client_ip(self._request({})) == "unknown"


class TestHeaders:

    def test_rate_limit_headers(self):
        result = RateLimitResult(allowed=True, remaining=4, reset_time=1_700_000_060_500)

        assert rate_limit_headers(result) == {
            "X-RateLimit-Remaining": "4",
            "X-RateLimit-Reset": "1700000061",
        }

    def test_retry_after_rounds_up_and_is_at_least_one(self):
        result = RateLimitResult(allowed=False, remaining=0, reset_time=10_500)

        assert retry_after_seconds(result, now_ms=9_000) == 2
        assert retry_after_seconds(result, now_ms=10_500) == 1
        assert retry_after_seconds(result, now_ms=20_000) == 1
