from enum import Enum


class RateLimitOperation(str, Enum):
    """
    Rate limit operation types.

    Each operation has its own independent rate limit counter.
    """

    # Checkout operations
    GET_TOTAL = "get_total"
    """
    Rate limit for checkout total computation.
    Config: GET_TOTAL_RATE_LIMIT_MAX_REQUESTS / GET_TOTAL_RATE_LIMIT_WINDOW_MS
    Default: 30 requests per minute per client IP
    """
