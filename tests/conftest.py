"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from unittest.mock import MagicMock
import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from enums.runtime_environment import RuntimeEnvironment

# Mock config module completely before any imports
config_mock = MagicMock()
config_mock.RUNTIME_ENVIRONMENT = RuntimeEnvironment.TEST
config_mock.WEBAPP_HOST = "127.0.0.1"
config_mock.WEBAPP_PORT = 8000
config_mock.FLORISTONE_AFFILIATE_ID = ""  # Mock mode unless a test patches credentials in
config_mock.FLORISTONE_API_TOKEN = ""
config_mock.FLORISTONE_FLOWERSHOP_URL = "https://floristone.test/api/rest/flowershop"
config_mock.FLORISTONE_CART_URL = "https://floristone.test/api/rest/shoppingcart"
config_mock.VENDOR_REQUEST_TIMEOUT_SECONDS = 5.0
config_mock.VENDOR_MAX_RETRIES = 2
config_mock.VENDOR_RETRY_DELAY_SECONDS = 0  # No sleeping between retries in tests
config_mock.MOCK_DELIVERY_FEE = 14.99
config_mock.MOCK_TAX_RATE = 0.115
config_mock.ORDER_DELIVERY_FEE = 14.99
config_mock.GET_TOTAL_RATE_LIMIT_MAX_REQUESTS = 30
config_mock.GET_TOTAL_RATE_LIMIT_WINDOW_MS = 60000
config_mock.CACHE_BACKEND = "memory"
config_mock.REDIS_HOST = None
config_mock.REDIS_PASSWORD = None
config_mock.DELIVERY_DATES_CACHE_TTL_SECONDS = 1200
config_mock.CORS_ALLOWED_ORIGINS = []
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_MASK_SECRETS = True
config_mock.LOG_RETENTION_DAYS = 5

sys.modules['config'] = config_mock

from models.vendor import VendorCartRow, VendorOrderResultDTO, VendorTotalDTO
from exceptions import VendorTransportError


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


# ============================================================================
# Vendor Fixtures
# ============================================================================

class FakeFloristOne:
    """
    In-memory stand-in for FloristOneClient.

    Behaves like the real vendor cart: flat rows, one per unit, mutable only
    through add-one-unit and remove-all-units. Every call is recorded in
    `calls` as (method, *args) so tests can assert the exact vendor traffic.

    Set `fail_add_on_call` to N to make the Nth add_to_cart call (1-based,
    counted from now) raise a transport error.
    """

    PRICES = {"ABC": 10.0, "XYZ": 25.0, "ROSE-12": 59.99}

    def __init__(self):
        self.carts: dict[str, list[VendorCartRow]] = {}
        self.calls: list[tuple] = []
        self.fail_add_on_call: int | None = None
        self.total = VendorTotalDTO(SUBTOTAL=0, ORDERTOTAL=0, FLORISTONEDELIVERYCHARGE=14.99, FLORISTONETAX=0)
        self.order_result = VendorOrderResultDTO(ORDERNO=123456)
        self.placed_orders = []
        self._next_session = 1
        self._next_item = 1
        self._adds = 0

    def seed(self, cart_id: str, *skus: str) -> None:
        self.carts.setdefault(cart_id, [])
        for sku in skus:
            self.carts[cart_id].append(self._row(sku))

    def _row(self, sku: str) -> VendorCartRow:
        row = VendorCartRow(
            CODE=sku,
            NAME=f"Bouquet {sku}",
            PRICE=self.PRICES.get(sku, 49.99),
            ITEMID=str(self._next_item),
        )
        self._next_item += 1
        return row

    def calls_to(self, method: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == method]

    async def create_cart(self) -> str:
        self.calls.append(("create_cart",))
        cart_id = f"SESSION{self._next_session}"
        self._next_session += 1
        self.carts[cart_id] = []
        return cart_id

    async def get_cart(self, cart_id: str) -> list[VendorCartRow]:
        self.calls.append(("get_cart", cart_id))
        return list(self.carts.get(cart_id, []))

    async def add_to_cart(self, cart_id: str, sku: str) -> None:
        self.calls.append(("add_to_cart", cart_id, sku))
        self._adds += 1
        if self.fail_add_on_call is not None and self._adds == self.fail_add_on_call:
            raise VendorTransportError("add_to_cart", 1, "Connection reset by peer")
        self.carts.setdefault(cart_id, []).append(self._row(sku))

    async def remove_from_cart(self, cart_id: str, sku: str) -> None:
        self.calls.append(("remove_from_cart", cart_id, sku))
        self.carts[cart_id] = [row for row in self.carts.get(cart_id, []) if row.product_code != sku]

    async def destroy_cart(self, cart_id: str) -> None:
        self.calls.append(("destroy_cart", cart_id))
        self.carts.pop(cart_id, None)

    async def get_cart_total(self, rows, zip_code: str) -> VendorTotalDTO:
        self.calls.append(("get_cart_total", tuple(row.product_code for row in rows), zip_code))
        return self.total

    async def place_order(self, order):
        self.calls.append(("place_order",))
        self.placed_orders.append(order)
        return self.order_result

    async def get_delivery_dates(self, zip_code: str) -> list[str]:
        self.calls.append(("get_delivery_dates", zip_code))
        return ["06/13/2025", "06/14/2025"]

    async def close(self) -> None:
        pass


@pytest.fixture
def fake_vendor():
    """Fresh in-memory vendor per test."""
    return FakeFloristOne()
