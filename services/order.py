import logging
import secrets
import string
import time

import config
from exceptions import EmptyCartException, MissingPaymentTokenException, OrderPlacementFailedException
from models.order import PlaceOrderRequest, PlacedOrderDTO
from models.vendor import (
    VendorCartRow,
    VendorCustomer,
    VendorOrderProduct,
    VendorOrderRequest,
    VendorRecipient,
)
from services.cart import CartBackend, CartService, MockCartBackend


def generate_mock_order_id() -> str:
    alphabet = string.ascii_uppercase + string.digits
    suffix = ''.join(secrets.choice(alphabet) for _ in range(6))
    return f"MOCK_{int(time.time() * 1000)}_{suffix}"


class OrderService:

    @staticmethod
    def build_vendor_order(rows: list[VendorCartRow], request: PlaceOrderRequest, client_ip: str) -> VendorOrderRequest:
        """
        Translate a validated checkout form and the cart rows into a vendor order.

        The customer block is the sender's contact details at the recipient's
        address. Every cart unit becomes one product with the same recipient,
        card and delivery date. The order total adds the fixed
        ORDER_DELIVERY_FEE once.
        """
        recipient = request.recipient
        sender = request.sender

        customer = VendorCustomer(
            name=sender.full_name,
            email=sender.email,
            phone=sender.phone,
            address1=recipient.address1,
            address2=recipient.address2 or "",
            city=recipient.city,
            state=recipient.state,
            zipcode=recipient.zip,
            ip=client_ip,
        )
        vendor_recipient = VendorRecipient(
            name=recipient.full_name,
            phone=recipient.phone,
            address1=recipient.address1,
            address2=recipient.address2 or "",
            city=recipient.city,
            state=recipient.state,
            zipcode=recipient.zip,
        )
        products = [
            VendorOrderProduct(
                code=row.product_code,
                price=row.price,
                delivery_date=request.delivery_date,
                card_message=request.card.full_message,
                special_instructions=request.special_instructions or "",
                recipient=vendor_recipient,
            )
            for row in rows
        ]
        order_total = round(sum(row.price for row in rows) + config.ORDER_DELIVERY_FEE, 2)

        return VendorOrderRequest(
            customer=customer,
            products=products,
            authorizenet_token=request.payment_token,
            order_total=order_total,
        )

    @staticmethod
    async def place_order(backend: CartBackend, request: PlaceOrderRequest, client_ip: str) -> PlacedOrderDTO:
        """
        Submit the cart as one vendor order.

        The vendor order is sent exactly once; a failed placement leaves the
        cart untouched so the customer can retry. Mock carts never reach the
        vendor and always succeed.

        Raises:
            CartNotFoundException: The request carries no cart
            MissingPaymentTokenException: Live order without a payment token
            EmptyCartException: The vendor cart holds no products
            OrderPlacementFailedException: The vendor response carries neither
                an order id nor a success flag
        """
        cart_id = CartService.require_cart_id(backend)

        if isinstance(backend, MockCartBackend):
            order_id = generate_mock_order_id()
            logging.info(f"Mock order {order_id} placed for cart {cart_id}")
            return PlacedOrderDTO(order_id=order_id, confirmation_number=order_id, mock=True)

        if not request.payment_token:
            raise MissingPaymentTokenException()

        rows = await backend.client.get_cart(cart_id)
        if not rows:
            raise EmptyCartException(cart_id)

        vendor_order = OrderService.build_vendor_order(rows, request, client_ip)
        logging.info(
            f"Placing order for cart {cart_id}: {len(rows)} unit(s), "
            f"total={vendor_order.order_total}, delivery={request.delivery_date}"
        )
        result = await backend.client.place_order(vendor_order)

        if not result.is_success:
            logging.error(f"Vendor did not confirm order for cart {cart_id}: status={result.status!r}")
            raise OrderPlacementFailedException(cart_id, "Failed to place order")

        order_no = str(result.order_no) if result.order_no is not None else None
        order_id = result.order_id or order_no or result.confirmation_number or ""
        confirmation_number = result.confirmation_number or order_no or order_id
        logging.info(f"Order {order_id} placed for cart {cart_id}")
        return PlacedOrderDTO(order_id=order_id, confirmation_number=confirmation_number)
