"""
Cart-related exceptions.
"""

from .base import StorefrontException


class CartException(StorefrontException):
    """Base exception for cart-related errors."""
    pass


class CartNotFoundException(CartException):
    """Raised when the request carries no cart identity."""

    status_code = 404

    def __init__(self, message: str = "No cart found"):
        super().__init__(message)


class CartItemNotFoundException(CartException):
    """Raised when a SKU or item id is not in the cart."""

    status_code = 404

    def __init__(self, cart_id: str, item_ref: str):
        super().__init__(
            "Item not found in cart",
            details={'cart_id': cart_id, 'item_ref': item_ref}
        )
        self.cart_id = cart_id
        self.item_ref = item_ref


class EmptyCartException(CartException):
    """Raised when trying to checkout with empty cart."""

    status_code = 400

    def __init__(self, cart_id: str):
        super().__init__(
            "Cart is empty",
            details={'cart_id': cart_id}
        )
        self.cart_id = cart_id


class MockCartTooLargeException(CartException):
    """Raised when the mock cart no longer fits in its cookie."""

    status_code = 400

    def __init__(self, size: int, limit: int):
        super().__init__(
            "Cart is full, remove an item before adding more",
            details={'size': size, 'limit': limit}
        )
        self.size = size
        self.limit = limit


class CartReconciliationException(CartException):
    """
    Raised when a live quantity update fails after the SKU was removed.

    The vendor cart then holds `units_restored` units of the SKU instead of
    `requested`. Re-issuing the same update-quantity call converges when at
    least one unit was restored; with none left the SKU is gone from the cart.
    """

    status_code = 500

    def __init__(self, cart_id: str, sku: str, requested: int, units_restored: int, reason: str):
        super().__init__(
            f"Cart update for {sku} was interrupted ({units_restored} of {requested} units restored): {reason}",
            details={
                'cart_id': cart_id,
                'sku': sku,
                'requested': requested,
                'units_restored': units_restored,
            }
        )
        self.cart_id = cart_id
        self.sku = sku
        self.requested = requested
        self.units_restored = units_restored
        self.reason = reason
