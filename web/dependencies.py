"""
Request-scoped building blocks shared by the API routers.

Shared objects (vendor client, rate limiter, delivery-date cache) are created
once in the app lifespan and read from app.state here, so tests can swap them
through app.dependency_overrides.
"""

import uuid
from datetime import datetime
from typing import Type, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from starlette.responses import Response

from exceptions import ValidationException
from middleware.rate_limit import FixedWindowRateLimiter
from services.cart import CartBackend, MockCartBackend, resolve_backend
from services.florist_one import FloristOneClient
from utils.cache import DeliveryDateCache
from utils.cookies import (
    clear_cart_id_cookie,
    clear_mock_cart_payload_cookie,
    create_cart_id_cookie,
    create_mock_cart_payload_cookie,
    get_cart_id,
    get_mock_cart_payload,
    is_secure_request,
)
from utils.validation import format_validation_error, require, validate_slug

ModelT = TypeVar("ModelT", bound=BaseModel)


def generate_correlation_id() -> str:
    """Generate unique correlation ID for request tracing."""
    return f"{datetime.now().strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"


def get_vendor_client(request: Request) -> FloristOneClient | None:
    """None when no vendor credentials are configured (mock mode)."""
    return request.app.state.vendor_client


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    return request.app.state.rate_limiter


def get_delivery_date_cache(request: Request) -> DeliveryDateCache:
    return request.app.state.delivery_date_cache


def get_location(state: str, city: str) -> tuple[str, str]:
    """Validated {state}/{city} route slugs."""
    return require(validate_slug, state, "state"), require(validate_slug, city, "city")


def get_cart_backend(
    request: Request,
    client: FloristOneClient | None = Depends(get_vendor_client),
) -> CartBackend:
    cart_id = get_cart_id(request)
    return resolve_backend(cart_id, get_mock_cart_payload(request), client)


async def parse_body(request: Request, model: Type[ModelT], labels: dict[str, str] | None = None) -> ModelT:
    """
    Decode and validate a JSON request body.

    Raises:
        ValidationException: Body is not a JSON object or fails validation
    """
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationException("Invalid JSON body")
    if not isinstance(payload, dict):
        raise ValidationException("Invalid JSON body")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ValidationException(format_validation_error(e, labels))


def attach_cart_cookies(response: Response, backend: CartBackend, request: Request) -> None:
    """
    Re-emit both cart cookies after a mutation.

    Cookie headers are not merged by the client, so leaving one out would
    drop its state. Live carts have no mock document, so that cookie is
    emitted cleared.
    """
    secure = is_secure_request(request)
    if backend.cart_id:
        create_cart_id_cookie(backend.cart_id, secure).apply_to(response)
    if isinstance(backend, MockCartBackend):
        create_mock_cart_payload_cookie(backend.payload, secure).apply_to(response)
    else:
        clear_mock_cart_payload_cookie(secure).apply_to(response)


def clear_cart_cookies(response: Response, request: Request) -> None:
    secure = is_secure_request(request)
    clear_cart_id_cookie(secure).apply_to(response)
    clear_mock_cart_payload_cookie(secure).apply_to(response)
