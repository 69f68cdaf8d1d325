"""
Order-related exceptions.
"""

from .base import StorefrontException


class OrderException(StorefrontException):
    """Base exception for order-related errors."""
    pass


class MissingPaymentTokenException(OrderException):
    """Raised when a live order arrives without a tokenized payment."""

    status_code = 400

    def __init__(self):
        super().__init__("Payment token is required")


class OrderPlacementFailedException(OrderException):
    """
    Raised when the vendor does not confirm the order.

    The vendor reports success in the body, so an HTTP 200 without an order
    id or success flag still ends up here.
    """

    status_code = 500

    def __init__(self, cart_id: str, reason: str):
        super().__init__(
            reason,
            details={'cart_id': cart_id}
        )
        self.cart_id = cart_id
        self.reason = reason
