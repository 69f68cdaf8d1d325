"""
Custom exceptions for the florist storefront.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application. Every exception carries the HTTP status the API layer
answers with (`status_code`).

Exception Hierarchy:
--------------------
StorefrontException (base)
├── ValidationException                      400
├── CartException
│   ├── CartNotFoundException                404
│   ├── CartItemNotFoundException            404
│   ├── EmptyCartException                   400
│   ├── MockCartTooLargeException            400
│   └── CartReconciliationException          500
├── VendorException                          500
│   ├── VendorAPIError
│   │   └── VendorAuthenticationError
│   ├── VendorTransportError
│   ├── VendorCredentialsMissingException
│   └── PricingUnavailableException
├── OrderException
│   ├── MissingPaymentTokenException         400
│   └── OrderPlacementFailedException        500
└── RateLimitExceededException               429

Usage:
------
Services raise specific exceptions:
    raise CartItemNotFoundException(cart_id, sku)

The API layer turns them into the JSON envelope:
    {"success": false, "error": "Item not found in cart"}
"""

from .base import StorefrontException, ValidationException
from .cart import (
    CartException,
    CartNotFoundException,
    CartItemNotFoundException,
    EmptyCartException,
    MockCartTooLargeException,
    CartReconciliationException,
)
from .vendor import (
    VendorException,
    VendorAPIError,
    VendorAuthenticationError,
    VendorTransportError,
    VendorCredentialsMissingException,
    PricingUnavailableException,
)
from .order import OrderException, MissingPaymentTokenException, OrderPlacementFailedException
from .rate_limit import RateLimitExceededException

__all__ = [
    # Base
    'StorefrontException',
    'ValidationException',

    # Cart
    'CartException',
    'CartNotFoundException',
    'CartItemNotFoundException',
    'EmptyCartException',
    'MockCartTooLargeException',
    'CartReconciliationException',

    # Vendor
    'VendorException',
    'VendorAPIError',
    'VendorAuthenticationError',
    'VendorTransportError',
    'VendorCredentialsMissingException',
    'PricingUnavailableException',

    # Order
    'OrderException',
    'MissingPaymentTokenException',
    'OrderPlacementFailedException',

    # Rate limiting
    'RateLimitExceededException',
]
