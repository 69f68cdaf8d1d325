"""
Cart identity cookies.

Two cookies carry all cart state the storefront owns:
- flo_cart_id: the cart id (vendor session id, or mock_cart_<ms>_<rand>)
- flo_mock_cart: the mock cart document, only used in mock mode

Both are Path=/, Max-Age 7 days, SameSite=Lax and Secure only over HTTPS.
The id cookie is HttpOnly; the mock document stays readable by the browser
so it can be inspected while developing.
"""

import json
import logging
import secrets
import string
import time
from dataclasses import dataclass
from urllib.parse import quote, unquote

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import Response

from exceptions import MockCartTooLargeException
from models.cart import MockCartPayload

CART_ID_COOKIE = "flo_cart_id"
MOCK_CART_COOKIE = "flo_mock_cart"
CART_COOKIE_MAX_AGE = 7 * 24 * 60 * 60
MOCK_CART_ID_PREFIX = "mock_cart_"

# Browsers drop cookies above ~4096 bytes including name and attributes
MAX_MOCK_CART_COOKIE_BYTES = 3800


@dataclass(frozen=True)
class SetCookie:
    """One Set-Cookie header, applied to the outgoing response."""
    name: str
    value: str
    max_age: int
    secure: bool
    http_only: bool
    path: str = "/"
    same_site: str = "lax"

    def apply_to(self, response: Response) -> None:
        response.set_cookie(
            key=self.name,
            value=self.value,
            max_age=self.max_age,
            path=self.path,
            secure=self.secure,
            httponly=self.http_only,
            samesite=self.same_site,
        )


def is_secure_request(request: Request) -> bool:
    return request.url.scheme == "https"


def generate_mock_cart_id() -> str:
    alphabet = string.ascii_lowercase + string.digits
    suffix = ''.join(secrets.choice(alphabet) for _ in range(6))
    return f"{MOCK_CART_ID_PREFIX}{int(time.time() * 1000)}_{suffix}"


def is_mock_cart_id(cart_id: str | None) -> bool:
    return bool(cart_id) and cart_id.startswith(MOCK_CART_ID_PREFIX)


def get_cart_id(request: Request) -> str | None:
    raw = request.cookies.get(CART_ID_COOKIE)
    if not raw:
        return None
    return unquote(raw) or None


def create_cart_id_cookie(cart_id: str, secure: bool) -> SetCookie:
    return SetCookie(
        name=CART_ID_COOKIE,
        value=quote(cart_id, safe=''),
        max_age=CART_COOKIE_MAX_AGE,
        secure=secure,
        http_only=True,
    )


def clear_cart_id_cookie(secure: bool) -> SetCookie:
    return SetCookie(name=CART_ID_COOKIE, value="", max_age=0, secure=secure, http_only=True)


def get_mock_cart_payload(request: Request) -> MockCartPayload:
    """
    Read the mock cart document.

    A missing or corrupt cookie is an empty cart, never an error.
    """
    raw = request.cookies.get(MOCK_CART_COOKIE)
    if not raw:
        return MockCartPayload()
    try:
        return MockCartPayload.model_validate_json(unquote(raw))
    except ValidationError as e:
        logging.warning(f"Discarding unreadable mock cart cookie: {e.error_count()} error(s)")
        return MockCartPayload()


def encode_mock_cart_payload(payload: MockCartPayload) -> str:
    """
    Raises:
        MockCartTooLargeException: If the encoded document does not fit in a cookie
    """
    document = json.dumps(payload.model_dump(), separators=(',', ':'))
    encoded = quote(document, safe='')
    if len(encoded) > MAX_MOCK_CART_COOKIE_BYTES:
        raise MockCartTooLargeException(len(encoded), MAX_MOCK_CART_COOKIE_BYTES)
    return encoded


def create_mock_cart_payload_cookie(payload: MockCartPayload, secure: bool) -> SetCookie:
    return SetCookie(
        name=MOCK_CART_COOKIE,
        value=encode_mock_cart_payload(payload),
        max_age=CART_COOKIE_MAX_AGE,
        secure=secure,
        http_only=False,
    )


def clear_mock_cart_payload_cookie(secure: bool) -> SetCookie:
    return SetCookie(name=MOCK_CART_COOKIE, value="", max_age=0, secure=secure, http_only=False)
