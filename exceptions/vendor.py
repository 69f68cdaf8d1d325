"""
Exceptions raised by the Florist One client and the pricing pipeline.
"""

from .base import StorefrontException


class VendorException(StorefrontException):
    """Base exception for upstream vendor failures."""

    status_code = 500


class VendorAPIError(VendorException):
    """Raised on a non-2xx, malformed, or error-carrying vendor response."""

    def __init__(self, operation: str, status: int, body: str):
        super().__init__(
            f"Florist One API error: {status} - {body}",
            details={'operation': operation, 'status': status}
        )
        self.operation = operation
        self.status = status
        self.body = body


class VendorAuthenticationError(VendorAPIError):
    """Raised when the vendor rejects the affiliate credentials."""

    def __init__(self, operation: str, body: str = ""):
        super().__init__(operation, 403, body)
        self.message = "Authentication failed - check API credentials"


class VendorTransportError(VendorException):
    """Raised when a vendor call times out or the connection fails."""

    def __init__(self, operation: str, attempts: int, reason: str):
        super().__init__(
            f"Florist One API unreachable: {reason}",
            details={'operation': operation, 'attempts': attempts}
        )
        self.operation = operation
        self.attempts = attempts
        self.reason = reason


class VendorCredentialsMissingException(VendorException):
    """Raised when a live cart is used but no credentials are configured."""

    def __init__(self):
        super().__init__("Florist One credentials not configured")


class PricingUnavailableException(VendorException):
    """Raised when the vendor total cannot be trusted for checkout."""

    def __init__(self, message: str = "Unable to determine delivery fee. Please try again."):
        super().__init__(message)
