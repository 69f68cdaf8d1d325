"""
Checkout endpoints under /api/{state}/{city}/checkout.
"""

import logging

from fastapi import APIRouter, Depends, Request

import config
from enums.rate_limit_operation import RateLimitOperation
from exceptions import RateLimitExceededException, ValidationException
from middleware.rate_limit import FixedWindowRateLimiter, get_client_ip, rate_limit_headers
from models.order import PlaceOrderRequest
from services.cart import CartBackend, MockCartBackend
from services.checkout import CheckoutService
from services.order import OrderService
from utils.responses import preflight_response, success_response
from utils.validation import require, validate_date, validate_zip
from web.dependencies import (
    clear_cart_cookies,
    generate_correlation_id,
    get_cart_backend,
    get_location,
    get_rate_limiter,
    parse_body,
)

logger = logging.getLogger(__name__)

checkout_router = APIRouter(prefix="/api/{state}/{city}/checkout", tags=["checkout"])


@checkout_router.api_route("/get-total", methods=["GET", "OPTIONS"])
async def get_total(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    limiter: FixedWindowRateLimiter = Depends(get_rate_limiter),
    backend: CartBackend = Depends(get_cart_backend),
):
    """
    Authoritative order total for the cart at a ZIP and delivery date.

    Query:
        zip: 5-digit ZIP code
        date: YYYY-MM-DD delivery date

    Rate limited per client IP (GET_TOTAL_RATE_LIMIT_*). Responses carry
    X-RateLimit-Remaining / X-RateLimit-Reset; a 429 also carries Retry-After.

    Returns:
        {subtotal, delivery, tax, total}
    """
    if request.method == "OPTIONS":
        return preflight_response()

    client_ip = get_client_ip(request)
    limit = limiter.check(
        RateLimitOperation.GET_TOTAL,
        client_ip,
        max_requests=config.GET_TOTAL_RATE_LIMIT_MAX_REQUESTS,
        window_ms=config.GET_TOTAL_RATE_LIMIT_WINDOW_MS,
    )
    if not limit.allowed:
        raise RateLimitExceededException(RateLimitOperation.GET_TOTAL.value, client_ip, limit.reset_time)

    zip_param = request.query_params.get("zip")
    date_param = request.query_params.get("date")
    if not zip_param or not date_param:
        raise ValidationException("ZIP code and delivery date are required")
    zip_code = require(validate_zip, zip_param, "zip")
    delivery_date = require(validate_date, date_param, "date")

    totals = await CheckoutService.compute_total(backend, zip_code, delivery_date)
    data = totals.model_dump()
    if isinstance(backend, MockCartBackend):
        data["mock"] = True
    return success_response(data, headers=rate_limit_headers(limit))


@checkout_router.api_route("/place-order", methods=["POST", "OPTIONS"])
async def place_order(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    backend: CartBackend = Depends(get_cart_backend),
):
    """
    Place the order for the current cart.

    Request Body:
        {
            "deliveryDate": "2025-06-14",
            "recipient": {"firstName", "lastName", "phone", "address1", "address2"?, "city", "state", "zip"},
            "sender": {"firstName", "lastName", "email", "phone"},
            "card": {"message", "signature"?},
            "specialInstructions"?: "...",
            "paymentToken": "<opaque token from the payment form>"
        }

    Cart cookies are cleared only when the order went through.

    Returns:
        {orderId, confirmationNumber}
    """
    if request.method == "OPTIONS":
        return preflight_response()
    correlation_id = generate_correlation_id()
    body = await parse_body(request, PlaceOrderRequest, PlaceOrderRequest.FIELD_LABELS)
    logger.info(f"[{correlation_id}] Placing order for {backend.mode.value} cart {backend.cart_id}")

    placed = await OrderService.place_order(backend, body, get_client_ip(request))

    logger.info(f"[{correlation_id}] Order {placed.order_id} placed")
    response = success_response(placed.to_response())
    clear_cart_cookies(response, request)
    return response
