from enum import Enum


class CartMode(str, Enum):
    """
    Backend a cart lives in.

    LIVE carts are held by the vendor; MOCK carts are simulated in a cookie
    when no vendor credentials are configured.
    """

    LIVE = "live"
    MOCK = "mock"
