from enum import Enum


class Idempotency(str, Enum):
    """
    Retry eligibility of a vendor call.

    IDEMPOTENT calls may be re-sent after a transport failure.
    MUTATING calls are sent at most once: a repeated add would add a second
    unit, a repeated order could charge the customer twice.
    """

    IDEMPOTENT = "idempotent"
    MUTATING = "mutating"


class VendorOperation(str, Enum):
    """
    Every call the Florist One client can make, tagged with its idempotency.
    """

    CREATE_CART = "create_cart"
    GET_CART = "get_cart"
    ADD_TO_CART = "add_to_cart"
    REMOVE_FROM_CART = "remove_from_cart"
    DESTROY_CART = "destroy_cart"
    GET_TOTAL = "get_total"
    PLACE_ORDER = "place_order"
    GET_DELIVERY_DATES = "get_delivery_dates"

    @property
    def idempotency(self) -> Idempotency:
        return _OPERATION_IDEMPOTENCY[self]

    @property
    def is_retryable(self) -> bool:
        return self.idempotency == Idempotency.IDEMPOTENT


_OPERATION_IDEMPOTENCY = {
    VendorOperation.CREATE_CART: Idempotency.MUTATING,
    VendorOperation.GET_CART: Idempotency.IDEMPOTENT,
    VendorOperation.ADD_TO_CART: Idempotency.MUTATING,
    VendorOperation.REMOVE_FROM_CART: Idempotency.MUTATING,
    VendorOperation.DESTROY_CART: Idempotency.MUTATING,
    VendorOperation.GET_TOTAL: Idempotency.IDEMPOTENT,
    VendorOperation.PLACE_ORDER: Idempotency.MUTATING,
    VendorOperation.GET_DELIVERY_DATES: Idempotency.IDEMPOTENT,
}
