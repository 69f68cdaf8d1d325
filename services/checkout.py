import logging

import config
from exceptions import PricingUnavailableException
from models.order import OrderTotalDTO
from services.cart import CartBackend, CartService, MockCartBackend


def _round(amount: float) -> float:
    return round(amount, 2)


class CheckoutService:

    @staticmethod
    async def compute_total(backend: CartBackend, zip_code: str, delivery_date: str) -> OrderTotalDTO:
        """
        Authoritative subtotal, delivery, tax and total for the cart.

        Live carts are priced by the vendor in a single bulk call covering
        every unit: the vendor charges one delivery fee per call, so splitting
        the call would multiply the fee. Vendor failures propagate; a live
        cart is never priced with local estimates.

        Mock carts get an approximation (MOCK_TAX_RATE, MOCK_DELIVERY_FEE);
        the delivery fee applies even to an empty mock cart. An empty live
        cart is all zeros and makes no pricing call.

        Raises:
            CartNotFoundException: The request carries no cart
            PricingUnavailableException: The vendor reported no (or a zero)
                delivery charge
        """
        cart_id = CartService.require_cart_id(backend)

        if isinstance(backend, MockCartBackend):
            subtotal = _round(sum(item.price * item.quantity for item in backend.payload.items))
            tax = _round(subtotal * config.MOCK_TAX_RATE)
            delivery = _round(config.MOCK_DELIVERY_FEE)
            return OrderTotalDTO(
                subtotal=subtotal,
                delivery=delivery,
                tax=tax,
                total=_round(subtotal + delivery + tax),
            )

        rows = await backend.client.get_cart(cart_id)
        if not rows:
            return OrderTotalDTO.zero()

        # The vendor prices by ZIP only; the date matters at order placement
        logging.info(f"Pricing cart {cart_id}: {len(rows)} unit(s), zip={zip_code}, date={delivery_date}")
        totals = await backend.client.get_cart_total(rows, zip_code)

        delivery_charge = totals.delivery_charge
        if not delivery_charge:
            # $0 delivery is never a legitimate answer in this domain
            logging.error(f"Vendor total for cart {cart_id} has no delivery charge ({delivery_charge!r})")
            raise PricingUnavailableException()

        subtotal = _round(totals.subtotal if totals.subtotal is not None else sum(row.price for row in rows))
        delivery = _round(delivery_charge)
        tax = _round(totals.tax or 0.0)

        if totals.order_total is not None and totals.order_total > 0:
            total = _round(totals.order_total)
        else:
            total = _round(subtotal + delivery + tax)

        return OrderTotalDTO(subtotal=subtotal, delivery=delivery, tax=tax, total=total)
