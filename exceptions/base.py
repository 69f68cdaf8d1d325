"""
Base exception classes for the florist storefront.
"""


class StorefrontException(Exception):
    """
    Base exception for all storefront errors.

    All custom exceptions in the storefront should inherit from this class.
    This allows catching all storefront-specific exceptions with a single handler.

    Attributes:
        message: Human-readable error message (safe to return to the client)
        details: Optional dict with additional context (cart IDs, SKUs, etc.)
        status_code: HTTP status the API layer answers with
    """

    status_code: int = 400

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation with context."""
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ValidationException(StorefrontException):
    """Raised when a route parameter, query parameter or body is malformed."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, details={'field': field} if field else None)
        self.field = field
