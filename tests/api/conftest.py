"""
Fixtures for the HTTP API tests.

The app is built with create_app() and its shared objects are set on
app.state directly; the lifespan (which would read vendor credentials from
config) is not run.
"""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from middleware.rate_limit import FixedWindowRateLimiter
from utils.cache import DeliveryDateCache, InMemoryCacheStore


@pytest.fixture
def storefront_app():
    app = create_app()
    app.state.vendor_client = None
    app.state.rate_limiter = FixedWindowRateLimiter()
    app.state.delivery_date_cache = DeliveryDateCache(InMemoryCacheStore())
    return app


@pytest.fixture
def client(storefront_app):
    """Mock-mode client (no vendor credentials)."""
    return TestClient(storefront_app, raise_server_exceptions=False)


@pytest.fixture
def live_client(storefront_app, fake_vendor):
    """Live-mode client backed by the in-memory vendor."""
    storefront_app.state.vendor_client = fake_vendor
    return TestClient(storefront_app, raise_server_exceptions=False)


@pytest.fixture
def order_body():
    return {
        "deliveryDate": "2025-06-14",
        "recipient": {
            "firstName": "Jane", "lastName": "Doe", "phone": "212-555-0101",
            "address1": "1 Main Street", "city": "New York", "state": "NY", "zip": "10001",
        },
        "sender": {"firstName": "John", "lastName": "Smith", "email": "john@example.com", "phone": "212-555-0199"},
        "card": {"message": "Happy birthday!", "signature": "John"},
        "paymentToken": "tok_abc123",
    }
