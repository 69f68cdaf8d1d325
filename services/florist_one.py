"""
Florist One API client.

One method per vendor capability. Every call:
- is authenticated with affiliate_id/token query parameters
- is bounded by VENDOR_REQUEST_TIMEOUT_SECONDS
- is retried only if its VendorOperation is idempotent, and only on
  transport failures (timeout, connection error), never on a vendor answer

The vendor's cart primitives are add-one-unit and remove-all-units; anything
smarter (quantities, reconciliation) lives in services/cart.py.
"""

import asyncio
import json
import logging

import aiohttp
from pydantic import ValidationError

import config
from enums.vendor_operation import VendorOperation
from exceptions import VendorAPIError, VendorAuthenticationError, VendorTransportError
from models.vendor import (
    VendorCartRow,
    VendorLineItem,
    VendorOrderRequest,
    VendorOrderResultDTO,
    VendorTotalDTO,
)

MAX_ERROR_BODY_LENGTH = 500


def has_florist_one_credentials() -> bool:
    """Live mode requires both the affiliate id and the API token."""
    return bool(config.FLORISTONE_AFFILIATE_ID and config.FLORISTONE_API_TOKEN)


class FloristOneClient:
    def __init__(
        self,
        affiliate_id: str,
        api_token: str,
        session: aiohttp.ClientSession | None = None,
        flowershop_url: str | None = None,
        cart_url: str | None = None,
        timeout_seconds: float | None = None,
        max_retries: int | None = None,
        retry_delay_seconds: float | None = None,
    ):
        self.affiliate_id = affiliate_id
        self.api_token = api_token
        self.flowershop_url = (flowershop_url or config.FLORISTONE_FLOWERSHOP_URL).rstrip("/")
        self.cart_url = cart_url or config.FLORISTONE_CART_URL
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds if timeout_seconds is not None else config.VENDOR_REQUEST_TIMEOUT_SECONDS
        )
        self.max_retries = max_retries if max_retries is not None else config.VENDOR_MAX_RETRIES
        self.retry_delay_seconds = (
            retry_delay_seconds if retry_delay_seconds is not None else config.VENDOR_RETRY_DELAY_SECONDS
        )
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_config(cls) -> "FloristOneClient":
        return cls(config.FLORISTONE_AFFILIATE_ID, config.FLORISTONE_API_TOKEN)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers={"Accept": "application/json"})
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def _request(
        self,
        operation: VendorOperation,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        json_body: dict | None = None,
    ):
        """
        Send one vendor call and return its decoded JSON body.

        Raises:
            VendorAuthenticationError: On HTTP 403
            VendorAPIError: On any other non-2xx status, a malformed body, or
                a 2xx body carrying an "error" field
            VendorTransportError: When the call timed out or could not connect
                on every allowed attempt
        """
        query = dict(params or {})
        query["affiliate_id"] = self.affiliate_id
        query["token"] = self.api_token

        max_attempts = 1 + self.max_retries if operation.is_retryable else 1
        attempt = 0

        while True:
            attempt += 1
            try:
                async with self._get_session().request(
                    method, url, params=query, json=json_body, timeout=self.timeout
                ) as response:
                    status = response.status
                    body = await response.text()
                break
            except (asyncio.TimeoutError, aiohttp.ClientError) as e:
                reason = str(e) or type(e).__name__
                if attempt < max_attempts:
                    logging.warning(
                        f"Florist One {operation.value} transport failure "
                        f"(attempt {attempt}/{max_attempts}): {reason}, retrying"
                    )
                    await asyncio.sleep(self.retry_delay_seconds)
                    continue
                logging.error(f"Florist One {operation.value} failed after {attempt} attempt(s): {reason}")
                raise VendorTransportError(operation.value, attempt, reason)

        if status == 403:
            raise VendorAuthenticationError(operation.value, body[:MAX_ERROR_BODY_LENGTH])
        if not 200 <= status < 300:
            raise VendorAPIError(operation.value, status, body[:MAX_ERROR_BODY_LENGTH])

        try:
            data = json.loads(body) if body else {}
        except ValueError:
            raise VendorAPIError(operation.value, status, "Malformed JSON response")

        if isinstance(data, dict) and data.get("error"):
            raise VendorAPIError(operation.value, status, str(data["error"]))

        return data

    async def create_cart(self) -> str:
        """Returns the new vendor cart id (SESSIONID)."""
        data = await self._request(VendorOperation.CREATE_CART, "POST", self.cart_url, json_body={})
        session_id = data.get("SESSIONID") if isinstance(data, dict) else None
        if not session_id:
            raise VendorAPIError(VendorOperation.CREATE_CART.value, 200, "Failed to create cart")
        return str(session_id)

    async def get_cart(self, cart_id: str) -> list[VendorCartRow]:
        """Flat cart: one row per physical unit."""
        data = await self._request(VendorOperation.GET_CART, "GET", self.cart_url, params={"sessionid": cart_id})
        products = data.get("products") if isinstance(data, dict) else None
        try:
            return [VendorCartRow.model_validate(row) for row in products or []]
        except ValidationError as e:
            raise VendorAPIError(VendorOperation.GET_CART.value, 200, f"Unexpected cart row: {e.error_count()} error(s)")

    async def add_to_cart(self, cart_id: str, sku: str) -> None:
        """Adds exactly one unit."""
        await self._request(
            VendorOperation.ADD_TO_CART, "PUT", self.cart_url,
            params={"sessionid": cart_id, "action": "add", "productcode": sku},
        )

    async def remove_from_cart(self, cart_id: str, sku: str) -> None:
        """Removes ALL units of the SKU; the vendor has no remove-one."""
        await self._request(
            VendorOperation.REMOVE_FROM_CART, "PUT", self.cart_url,
            params={"sessionid": cart_id, "action": "remove", "productcode": sku},
        )

    async def destroy_cart(self, cart_id: str) -> None:
        await self._request(
            VendorOperation.DESTROY_CART, "DELETE", self.cart_url,
            params={"sessionid": cart_id, "action": "destroy"},
        )

    async def get_cart_total(self, rows: list[VendorCartRow], zip_code: str) -> VendorTotalDTO:
        """
        Price every unit of the cart in ONE call.

        The vendor charges a delivery fee per gettotal call, so the whole cart
        must go in a single request.
        """
        line_items = [VendorLineItem(code=row.product_code, price=row.price, zipcode=zip_code) for row in rows]
        products = json.dumps([item.to_vendor() for item in line_items])
        data = await self._request(
            VendorOperation.GET_TOTAL, "GET", f"{self.flowershop_url}/gettotal",
            params={"products": products},
        )
        return VendorTotalDTO.model_validate(data)

    async def place_order(self, order: VendorOrderRequest) -> VendorOrderResultDTO:
        data = await self._request(
            VendorOperation.PLACE_ORDER, "POST", f"{self.flowershop_url}/placeorder",
            json_body=order.to_request_body(),
        )
        return VendorOrderResultDTO.model_validate(data)

    async def get_delivery_dates(self, zip_code: str) -> list[str]:
        """Available dates in the vendor's MM/DD/YYYY format."""
        data = await self._request(
            VendorOperation.GET_DELIVERY_DATES, "GET", f"{self.flowershop_url}/checkdeliverydate",
            params={"zipcode": zip_code},
        )
        dates = data.get("DATES") if isinstance(data, dict) else None
        return [str(d) for d in dates or []]
