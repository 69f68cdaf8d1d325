"""
Unit Tests: Cart Cookies

Tests for utils/cookies.py covering:
- mock cart id generation and prefix detection
- cart id cookie read/write (URL encoding, attributes)
- mock cart document read (corrupt -> empty) and size bound
"""

from unittest.mock import MagicMock
from urllib.parse import quote

import pytest
from starlette.responses import Response

from exceptions import MockCartTooLargeException
from models.cart import CartItemDTO, MockCartPayload
from utils.cookies import (
    CART_COOKIE_MAX_AGE,
    CART_ID_COOKIE,
    MAX_MOCK_CART_COOKIE_BYTES,
    MOCK_CART_COOKIE,
    clear_cart_id_cookie,
    create_cart_id_cookie,
    create_mock_cart_payload_cookie,
    encode_mock_cart_payload,
    generate_mock_cart_id,
    get_cart_id,
    get_mock_cart_payload,
    is_mock_cart_id,
)


def _request(cookies: dict[str, str]):
    request = MagicMock()
    request.cookies = cookies
    return request


def _set_cookie_headers(response: Response) -> list[str]:
    return [value.decode() for key, value in response.raw_headers if key == b"set-cookie"]


class TestCartId:

    def test_generated_mock_id_has_prefix(self):
        cart_id = generate_mock_cart_id()

        assert cart_id.startswith("mock_cart_")
        assert is_mock_cart_id(cart_id)
        assert generate_mock_cart_id() != cart_id

    @pytest.mark.parametrize("cart_id", [None, "", "SESSION123", "cart_mock_1"])
    def test_non_mock_ids(self, cart_id):
        assert not is_mock_cart_id(cart_id)

    def test_cookie_value_is_url_decoded(self):
        assert get_cart_id(_request({CART_ID_COOKIE: "abc%2F123"})) == "abc/123"

    def test_missing_cookie(self):
        assert get_cart_id(_request({})) is None

    def test_cart_id_cookie_attributes(self):
        response = Response()

        create_cart_id_cookie("abc/123", secure=True).apply_to(response)

        header = _set_cookie_headers(response)[0]
        assert header.startswith(f"{CART_ID_COOKIE}=abc%2F123;")
        assert f"Max-Age={CART_COOKIE_MAX_AGE}" in header
        assert "Path=/" in header
        assert "HttpOnly" in header
        assert "Secure" in header
        assert "SameSite=lax" in header

    def test_not_secure_over_http(self):
        response = Response()

        create_cart_id_cookie("S1", secure=False).apply_to(response)

        assert "Secure" not in _set_cookie_headers(response)[0]

    def test_clear_cookie_expires_immediately(self):
        response = Response()

        clear_cart_id_cookie(secure=False).apply_to(response)

        assert "Max-Age=0" in _set_cookie_headers(response)[0]


class TestMockCartPayload:

    def test_reads_document(self):
        payload = MockCartPayload(items=[CartItemDTO(sku="MOCK-001", name="Roses", price=59.99, quantity=2)])
        raw = encode_mock_cart_payload(payload)

        assert get_mock_cart_payload(_request({MOCK_CART_COOKIE: raw})) == payload

    @pytest.mark.parametrize("raw", [
        "not-json",
        quote('{"items": "nope"}'),
        quote('{"items": [{"sku": "A", "name": "x", "price": 1, "quantity": 0}]}'),
    ])
    def test_corrupt_document_is_empty_cart(self, raw):
        assert get_mock_cart_payload(_request({MOCK_CART_COOKIE: raw})).items == []

    def test_missing_document_is_empty_cart(self):
        assert get_mock_cart_payload(_request({})).items == []

    def test_mock_cookie_readable_by_browser(self):
        response = Response()

        create_mock_cart_payload_cookie(MockCartPayload(), secure=False).apply_to(response)

        header = _set_cookie_headers(response)[0]
        assert header.startswith(f"{MOCK_CART_COOKIE}=")
        assert "HttpOnly" not in header

    def test_oversized_document_rejected(self):
        items = [
            CartItemDTO(sku=f"MOCK-{i:03d}", name="A very long bouquet name " * 3, price=99.99, quantity=1)
            for i in range(60)
        ]

        with pytest.raises(MockCartTooLargeException) as exc_info:
            encode_mock_cart_payload(MockCartPayload(items=items))

        assert exc_info.value.status_code == 400

    def test_typical_document_fits(self):
        items = [CartItemDTO(sku=f"MOCK-BD-00{i}", name="Birthday Bliss Bouquet", price=64.99, quantity=2) for i in range(5)]

        assert len(encode_mock_cart_payload(MockCartPayload(items=items))) < MAX_MOCK_CART_COOKIE_BYTES
