"""
Rate Limiting

Fixed-window request counter keyed by client IP, protecting the checkout
total endpoint (the most vendor-expensive read).

Best effort by nature:
- counters live in process memory and vanish on restart
- each worker process counts on its own
- an internal error lets the request through (fail open)

Configuration:
- GET_TOTAL_RATE_LIMIT_MAX_REQUESTS: Requests allowed per window
- GET_TOTAL_RATE_LIMIT_WINDOW_MS: Window length in milliseconds
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

from starlette.requests import Request

from enums.rate_limit_operation import RateLimitOperation

CLEANUP_INTERVAL_MS = 60_000


@dataclass
class RateLimitEntry:
    count: int
    reset_time: int  # epoch ms


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_time: int  # epoch ms


def _now_ms() -> int:
    return int(time.time() * 1000)


class FixedWindowRateLimiter:
    """
    In-process fixed-window limiter.

    A client's window starts on its first request and a new one starts lazily
    on the first request after reset_time. Expired entries are swept at most
    once per CLEANUP_INTERVAL_MS so the map stays bounded.

    Usage:
        limiter = FixedWindowRateLimiter()
        result = limiter.check(RateLimitOperation.GET_TOTAL, ip, max_requests=30, window_ms=60000)
        if not result.allowed:
            # answer 429
            pass
    """

    def __init__(self, clock: Callable[[], int] = _now_ms):
        """
        Args:
            clock: Returns the current time in epoch milliseconds
        """
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._last_cleanup = clock()

    def check(
        self,
        operation: RateLimitOperation,
        client_ip: str,
        max_requests: int,
        window_ms: int
    ) -> RateLimitResult:
        """
        Count one request and decide whether it may proceed.

        Each operation has its own independent counter per client IP.
        """
        try:
            now = self._clock()
            self._cleanup(now)

            key = f"{operation.value}:{client_ip}"
            entry = self._entries.get(key)

            if entry is None or entry.reset_time < now:
                entry = RateLimitEntry(count=1, reset_time=now + window_ms)
                self._entries[key] = entry
                return RateLimitResult(allowed=True, remaining=max_requests - 1, reset_time=entry.reset_time)

            if entry.count < max_requests:
                entry.count += 1
                return RateLimitResult(allowed=True, remaining=max_requests - entry.count, reset_time=entry.reset_time)

            logging.warning(
                f"Rate limit exceeded: ip={client_ip}, operation={operation.value}, "
                f"count={entry.count}/{max_requests}, resets_in={max(0, entry.reset_time - now) // 1000}s"
            )
            return RateLimitResult(allowed=False, remaining=0, reset_time=entry.reset_time)

        except Exception as e:
            # Never block a customer because the limiter itself broke
            logging.error(f"Rate limiter error: {e}")
            return RateLimitResult(allowed=True, remaining=max_requests, reset_time=_now_ms() + window_ms)

    def reset(self, operation: RateLimitOperation, client_ip: str) -> None:
        self._entries.pop(f"{operation.value}:{client_ip}", None)

    def _cleanup(self, now: int) -> None:
        if now - self._last_cleanup < CLEANUP_INTERVAL_MS:
            return
        self._last_cleanup = now
        expired = [key for key, entry in self._entries.items() if entry.reset_time < now]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)


def get_client_ip(request: Request) -> str:
    """cf-connecting-ip, then first x-forwarded-for hop, then x-real-ip."""
    headers = request.headers
    cf_ip = headers.get("cf-connecting-ip")
    if cf_ip:
        return cf_ip
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return "unknown"


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    return {
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(math.ceil(result.reset_time / 1000)),
    }


def retry_after_seconds(result: RateLimitResult, now_ms: int | None = None) -> int:
    now_ms = now_ms if now_ms is not None else _now_ms()
    return max(1, math.ceil((result.reset_time - now_ms) / 1000))
