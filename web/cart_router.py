"""
Cart endpoints under /api/{state}/{city}/cart.

Each endpoint is method-gated (405 with Allow on mismatch) and answers
OPTIONS preflights with 204. Mutations re-emit the cart cookies.
"""

import logging

from fastapi import APIRouter, Depends, Request

from exceptions import StorefrontException
from models.cart import FIELD_LABELS, AddToCartRequest, RemoveFromCartRequest, UpdateQuantityRequest
from services.cart import CartBackend, CartService, LiveCartBackend, resolve_backend
from services.florist_one import FloristOneClient
from utils.cookies import get_cart_id, get_mock_cart_payload, is_mock_cart_id
from utils.responses import error_response, preflight_response, success_response
from web.dependencies import (
    attach_cart_cookies,
    clear_cart_cookies,
    generate_correlation_id,
    get_cart_backend,
    get_location,
    get_vendor_client,
    parse_body,
)

logger = logging.getLogger(__name__)

cart_router = APIRouter(prefix="/api/{state}/{city}/cart", tags=["cart"])


@cart_router.api_route("", methods=["GET", "OPTIONS"])
async def get_cart(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    backend: CartBackend = Depends(get_cart_backend),
):
    """
    Current cart, SKU-aggregated.

    Returns:
        {cartId, items[], subtotal, deliveryFee, serviceFee, total, isEmpty, mock}
    """
    if request.method == "OPTIONS":
        return preflight_response()
    view = await CartService.get_cart(backend)
    return success_response(view.to_response())


@cart_router.api_route("/create", methods=["POST", "OPTIONS"])
async def create_cart(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    backend: CartBackend = Depends(get_cart_backend),
):
    if request.method == "OPTIONS":
        return preflight_response()
    cart_id, is_existing = await CartService.create_cart(backend)
    response = success_response({"cartId": cart_id, "isExisting": is_existing})
    attach_cart_cookies(response, backend, request)
    return response


@cart_router.api_route("/add", methods=["POST", "OPTIONS"])
async def add_to_cart(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    backend: CartBackend = Depends(get_cart_backend),
):
    """
    Request Body:
        {"sku": "MOCK-BD-001", "quantity": 2}   (quantity 1-99, default 1)

    A live add that fails part way still sets the cart id cookie once the
    vendor cart exists, since the units added so far stay in it.
    """
    if request.method == "OPTIONS":
        return preflight_response()
    correlation_id = generate_correlation_id()
    body = await parse_body(request, AddToCartRequest, FIELD_LABELS)
    logger.info(f"[{correlation_id}] Add {body.quantity} x {body.sku} ({backend.mode.value} cart)")

    try:
        view = await CartService.add_to_cart(backend, body.sku, body.quantity)
    except StorefrontException as e:
        if not isinstance(backend, LiveCartBackend) or not backend.cart_id:
            raise
        logger.error(f"[{correlation_id}] Add to cart {backend.cart_id} failed part way: {e!r}")
        response = error_response(e.message, e.status_code)
    else:
        response = success_response(view.to_response())
    attach_cart_cookies(response, backend, request)
    return response


@cart_router.api_route("/remove", methods=["POST", "OPTIONS"])
async def remove_from_cart(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    backend: CartBackend = Depends(get_cart_backend),
):
    """
    Request Body:
        {"itemId": "item_0"} or {"sku": "ABC-123"}
    """
    if request.method == "OPTIONS":
        return preflight_response()
    CartService.require_cart_id(backend)
    body = await parse_body(request, RemoveFromCartRequest, FIELD_LABELS)

    view = await CartService.remove_from_cart(backend, item_id=body.item_id, sku=body.sku)
    response = success_response(view.to_response())
    attach_cart_cookies(response, backend, request)
    return response


@cart_router.api_route("/update-quantity", methods=["POST", "OPTIONS"])
async def update_quantity(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    backend: CartBackend = Depends(get_cart_backend),
):
    """
    Request Body:
        {"sku": "ABC-123", "quantity": 3}   (0-99, 0 removes the line)

    404 when the SKU is not in the cart. A 500 carrying "interrupted" means
    the SKU was removed but not fully re-added; sending the same request
    again completes it while at least one unit is left.
    """
    if request.method == "OPTIONS":
        return preflight_response()
    correlation_id = generate_correlation_id()
    CartService.require_cart_id(backend)
    body = await parse_body(request, UpdateQuantityRequest, FIELD_LABELS)
    logger.info(f"[{correlation_id}] Set {body.sku} to {body.quantity} in cart {backend.cart_id}")

    view = await CartService.update_quantity(backend, body.sku, body.quantity)
    response = success_response(view.to_response())
    attach_cart_cookies(response, backend, request)
    return response


@cart_router.api_route("/destroy", methods=["POST", "OPTIONS"])
async def destroy_cart(
    request: Request,
    location: tuple[str, str] = Depends(get_location),
    client: FloristOneClient | None = Depends(get_vendor_client),
):
    """
    Destroy the cart. Both cookies are cleared on every outcome, including a
    vendor failure.
    """
    if request.method == "OPTIONS":
        return preflight_response()
    correlation_id = generate_correlation_id()
    cart_id = get_cart_id(request)

    if not cart_id:
        response = success_response({"message": "No cart to destroy"})
    elif client is None and not is_mock_cart_id(cart_id):
        # Live cart left over from a configuration that had credentials
        logger.warning(f"[{correlation_id}] No vendor credentials, dropping cookies of live cart {cart_id}")
        response = success_response({"message": "Cart destroyed"})
    else:
        try:
            backend = resolve_backend(cart_id, get_mock_cart_payload(request), client)
            await CartService.destroy(backend)
            response = success_response({"message": "Cart destroyed"})
        except StorefrontException as e:
            logger.error(f"[{correlation_id}] Destroying cart {cart_id} failed upstream: {e!r}")
            response = error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"[{correlation_id}] Destroying cart {cart_id} failed: {e}")
            response = error_response("Failed to destroy cart", 500)

    clear_cart_cookies(response, request)
    return response
