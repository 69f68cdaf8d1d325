"""
Cart engine.

Carts live in one of two backends, resolved once per request:
- LiveCartBackend: the vendor holds the cart as a flat list, one row per
  physical unit, mutable only through add-one-unit and remove-all-units
- MockCartBackend: the cart is a quantity-bearing document kept in a cookie,
  used when no vendor credentials are configured

Every operation returns the same SKU-aggregated CartView for both backends.
Live views are always built from a fresh vendor read after mutating, never
from local bookkeeping.
"""

import logging
import re
from dataclasses import dataclass, field

from enums.cart_mode import CartMode
from exceptions import (
    CartItemNotFoundException,
    CartNotFoundException,
    CartReconciliationException,
    StorefrontException,
    VendorCredentialsMissingException,
)
from models.cart import CartItemDTO, CartView, MockCartPayload
from models.vendor import VendorCartRow
from services.florist_one import FloristOneClient
from services.mock_catalog import get_mock_product
from utils.cookies import generate_mock_cart_id, is_mock_cart_id

LIVE_ITEM_ID_PREFIX = "item_"
MOCK_ITEM_ID_PREFIX = "mock_item_"
LIVE_ITEM_ID_PATTERN = re.compile(r'^item_(\d+)$')
MOCK_ITEM_ID_PATTERN = re.compile(r'^mock_item_(\d+)$')


@dataclass
class LiveCartBackend:
    client: FloristOneClient
    # None until the first add creates the vendor cart
    cart_id: str | None = None

    @property
    def mode(self) -> CartMode:
        return CartMode.LIVE


@dataclass
class MockCartBackend:
    cart_id: str | None = None
    payload: MockCartPayload = field(default_factory=MockCartPayload)

    @property
    def mode(self) -> CartMode:
        return CartMode.MOCK


CartBackend = LiveCartBackend | MockCartBackend


def resolve_backend(
    cart_id: str | None,
    mock_payload: MockCartPayload,
    client: FloristOneClient | None
) -> CartBackend:
    """
    Pick the backend for this request.

    The mock_cart_ prefix always means a mock cart. Without a cart and without
    credentials a new cart will be a mock one. An existing live cart id with no
    credentials configured cannot be served.

    Raises:
        VendorCredentialsMissingException: Live cart id but no vendor client
    """
    if is_mock_cart_id(cart_id):
        return MockCartBackend(cart_id=cart_id, payload=mock_payload)
    if client is None:
        if cart_id:
            raise VendorCredentialsMissingException()
        return MockCartBackend(cart_id=None, payload=MockCartPayload())
    return LiveCartBackend(client=client, cart_id=cart_id)


def aggregate_cart_rows(rows: list[VendorCartRow]) -> list[CartItemDTO]:
    """
    Group the vendor's flat per-unit rows into one line per SKU.

    Lines come out in first-seen order. Name and price are taken from the
    first row of each SKU; quantity is the row count. Vendor item ids are
    per-unit and dropped here.
    """
    grouped: dict[str, CartItemDTO] = {}
    for row in rows:
        line = grouped.get(row.product_code)
        if line is None:
            grouped[row.product_code] = CartItemDTO(
                sku=row.product_code,
                name=row.product_name,
                price=row.price,
                quantity=1,
            )
        else:
            line.quantity += 1
    return list(grouped.values())


def count_units(rows: list[VendorCartRow], sku: str) -> int:
    return sum(1 for row in rows if row.product_code == sku)


class CartService:

    @staticmethod
    def _mock_view(backend: MockCartBackend) -> CartView:
        return CartView.from_items(backend.cart_id, backend.payload.items, MOCK_ITEM_ID_PREFIX, mock=True)

    @staticmethod
    async def _live_view(backend: LiveCartBackend) -> CartView:
        rows = await backend.client.get_cart(backend.cart_id)
        return CartView.from_items(backend.cart_id, aggregate_cart_rows(rows), LIVE_ITEM_ID_PREFIX, mock=False)

    @staticmethod
    def require_cart_id(backend: CartBackend) -> str:
        if not backend.cart_id:
            raise CartNotFoundException()
        return backend.cart_id

    @staticmethod
    async def get_cart(backend: CartBackend) -> CartView:
        """Current cart; a request without a cart gets an empty view."""
        if isinstance(backend, MockCartBackend):
            return CartService._mock_view(backend)
        if not backend.cart_id:
            return CartView(cart_id=None)
        return await CartService._live_view(backend)

    @staticmethod
    async def create_cart(backend: CartBackend) -> tuple[str, bool]:
        """
        Returns:
            (cart_id, is_existing)
        """
        if backend.cart_id:
            return backend.cart_id, True
        if isinstance(backend, LiveCartBackend):
            backend.cart_id = await backend.client.create_cart()
        else:
            backend.cart_id = generate_mock_cart_id()
        logging.info(f"Created {backend.mode.value} cart {backend.cart_id}")
        return backend.cart_id, False

    @staticmethod
    async def add_to_cart(backend: CartBackend, sku: str, quantity: int) -> CartView:
        """
        Add `quantity` units of `sku`, creating the cart if needed.

        Live carts get one vendor add per unit, in order. The first failure
        aborts and is raised; units already added stay in the cart.
        """
        await CartService.create_cart(backend)

        if isinstance(backend, MockCartBackend):
            existing = next((item for item in backend.payload.items if item.sku == sku), None)
            if existing is not None:
                existing.quantity += quantity
            else:
                product = get_mock_product(sku)
                backend.payload.items.append(
                    CartItemDTO(sku=sku, name=product.name, price=product.price, quantity=quantity)
                )
            return CartService._mock_view(backend)

        for _ in range(quantity):
            await backend.client.add_to_cart(backend.cart_id, sku)
        logging.info(f"Added {quantity} x {sku} to cart {backend.cart_id}")
        return await CartService._live_view(backend)

    @staticmethod
    def _resolve_live_target(rows: list[VendorCartRow], item_id: str | None, sku: str | None) -> str | None:
        """
        Product code to remove, or None when nothing in the cart matches.

        item_<N> addresses the Nth line of the aggregated view. A raw vendor
        item id is accepted too and resolves to its row's product code.
        """
        if item_id and not sku:
            match = LIVE_ITEM_ID_PATTERN.match(item_id)
            if match:
                unique_skus = list(dict.fromkeys(row.product_code for row in rows))
                index = int(match.group(1))
                if index < len(unique_skus):
                    sku = unique_skus[index]
            else:
                row = next((row for row in rows if row.item_id == item_id), None)
                if row is not None:
                    sku = row.product_code
        if not sku or count_units(rows, sku) == 0:
            return None
        return sku

    @staticmethod
    async def remove_from_cart(backend: CartBackend, item_id: str | None = None, sku: str | None = None) -> CartView:
        """
        Remove every unit of one line, addressed by SKU or by item id.

        Raises:
            CartNotFoundException: The request carries no cart
            CartItemNotFoundException: Nothing in the cart matches
        """
        cart_id = CartService.require_cart_id(backend)
        item_ref = sku or item_id

        if isinstance(backend, MockCartBackend):
            items = backend.payload.items
            index = None
            if sku:
                index = next((i for i, item in enumerate(items) if item.sku == sku), None)
            elif item_id:
                match = MOCK_ITEM_ID_PATTERN.match(item_id)
                if match and int(match.group(1)) < len(items):
                    index = int(match.group(1))
            if index is None:
                raise CartItemNotFoundException(cart_id, item_ref)
            del items[index]
            return CartService._mock_view(backend)

        rows = await backend.client.get_cart(cart_id)
        target = CartService._resolve_live_target(rows, item_id, sku)
        if target is None:
            raise CartItemNotFoundException(cart_id, item_ref)
        await backend.client.remove_from_cart(cart_id, target)
        logging.info(f"Removed {item_ref} from cart {cart_id}")
        return await CartService._live_view(backend)

    @staticmethod
    async def update_quantity(backend: CartBackend, sku: str, new_quantity: int) -> CartView:
        """
        Move one SKU to exactly `new_quantity` units (0 removes it).

        Live carts can only add one unit or remove all units, so:
        - growing adds the difference
        - shrinking removes the SKU, then re-adds `new_quantity` units
        - an unchanged quantity makes no vendor call
        Calling it twice with the same target leaves the same cart.

        Only SKUs already in the cart can be updated; adding is add_to_cart's
        job. Setting an absent live SKU to 0 is a no-op.

        Raises:
            CartNotFoundException: The request carries no cart
            CartItemNotFoundException: The SKU is not in the cart
            CartReconciliationException: A re-add failed after the SKU was
                removed; re-issuing the same update converges as long as
                at least one unit was restored
        """
        cart_id = CartService.require_cart_id(backend)

        if isinstance(backend, MockCartBackend):
            items = backend.payload.items
            index = next((i for i, item in enumerate(items) if item.sku == sku), None)
            if index is None:
                raise CartItemNotFoundException(cart_id, sku)
            if new_quantity == 0:
                del items[index]
            else:
                items[index].quantity = new_quantity
            return CartService._mock_view(backend)

        client = backend.client
        rows = await client.get_cart(cart_id)
        current_quantity = count_units(rows, sku)
        if current_quantity == 0 and new_quantity > 0:
            raise CartItemNotFoundException(cart_id, sku)

        if new_quantity > current_quantity:
            for _ in range(new_quantity - current_quantity):
                await client.add_to_cart(cart_id, sku)
        elif new_quantity < current_quantity:
            await client.remove_from_cart(cart_id, sku)
            restored = 0
            try:
                for _ in range(new_quantity):
                    await client.add_to_cart(cart_id, sku)
                    restored += 1
            except StorefrontException as e:
                logging.error(
                    f"Quantity update of {sku} in cart {cart_id} interrupted: "
                    f"{restored}/{new_quantity} units restored: {e}"
                )
                raise CartReconciliationException(cart_id, sku, new_quantity, restored, str(e)) from e

        if new_quantity != current_quantity:
            logging.info(f"Cart {cart_id}: {sku} {current_quantity} -> {new_quantity}")
        return await CartService._live_view(backend)

    @staticmethod
    async def destroy(backend: CartBackend) -> None:
        """Drop the vendor cart. Clearing the cookies is up to the caller and happens regardless."""
        if isinstance(backend, LiveCartBackend) and backend.cart_id:
            await backend.client.destroy_cart(backend.cart_id)
            logging.info(f"Destroyed cart {backend.cart_id}")
