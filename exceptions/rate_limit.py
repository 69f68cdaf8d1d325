"""
Rate limiting exceptions.
"""

from .base import StorefrontException


class RateLimitExceededException(StorefrontException):
    """Raised when a client exceeds the request budget of an operation."""

    status_code = 429

    def __init__(self, operation: str, client_ip: str, reset_time: int):
        super().__init__(
            "Too many requests. Please try again shortly.",
            details={'operation': operation, 'client_ip': client_ip, 'reset_time': reset_time}
        )
        self.operation = operation
        self.client_ip = client_ip
        self.reset_time = reset_time
