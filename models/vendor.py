# Wire shapes of the Florist One API. The vendor answers with upper-case keys
# and expects upper-case keys (and stringified JSON) for order placement, so
# these models translate at the client boundary and nothing past
# services/florist_one.py sees vendor field names.
import json
import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class VendorCartRow(BaseModel):
    """
    One physical unit in a vendor cart.

    The vendor cart is flat: two units of the same SKU are two rows with the
    same product code and distinct item ids.
    """
    model_config = ConfigDict(extra='ignore')

    product_code: str = Field(validation_alias=AliasChoices('CODE', 'product_code'))
    product_name: str = Field(default="", validation_alias=AliasChoices('NAME', 'product_name'))
    price: float = Field(default=0.0, validation_alias=AliasChoices('PRICE', 'price'))
    item_id: str | None = Field(default=None, validation_alias=AliasChoices('ITEMID', 'item_id'))

    @field_validator('product_code', 'product_name', 'item_id', mode='before')
    @classmethod
    def _coerce_str(cls, value):
        if value is None:
            return value
        return str(value)


class VendorTotalDTO(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    subtotal: float | None = Field(default=None, alias='SUBTOTAL')
    order_total: float | None = Field(default=None, alias='ORDERTOTAL')
    floristone_delivery_charge: float | None = Field(default=None, alias='FLORISTONEDELIVERYCHARGE')
    delivery_charge_total: float | None = Field(default=None, alias='DELIVERYCHARGETOTAL')
    floristone_tax: float | None = Field(default=None, alias='FLORISTONETAX')
    tax_total: float | None = Field(default=None, alias='TAXTOTAL')

    @property
    def tax(self) -> float | None:
        """First present of FLORISTONETAX, TAXTOTAL."""
        if self.floristone_tax is not None:
            return self.floristone_tax
        return self.tax_total

    @property
    def delivery_charge(self) -> float | None:
        """First present of FLORISTONEDELIVERYCHARGE, DELIVERYCHARGETOTAL."""
        if self.floristone_delivery_charge is not None:
            return self.floristone_delivery_charge
        return self.delivery_charge_total


class VendorOrderResultDTO(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    order_id: str | None = Field(default=None, alias='ORDERID')
    order_no: int | None = Field(default=None, alias='ORDERNO')
    confirmation_number: str | None = Field(default=None, alias='CONFIRMATIONNUMBER')
    success: bool | None = Field(default=None, alias='SUCCESS')
    status: str | None = Field(default=None, alias='STATUS')

    @field_validator('order_id', 'confirmation_number', mode='before')
    @classmethod
    def _coerce_str(cls, value):
        if value is None:
            return value
        return str(value)

    @property
    def is_success(self) -> bool:
        # Success lives in the body; HTTP 200 alone proves nothing
        return bool(self.order_id) or self.order_no is not None or self.success is True


class VendorLineItem(BaseModel):
    """One product priced by the bulk gettotal call."""
    code: str
    price: float
    zipcode: str

    def to_vendor(self) -> dict:
        return {
            "CODE": self.code,
            "PRICE": round(self.price, 2),
            "RECIPIENT": {"ZIPCODE": self.zipcode},
        }


def _digits(value: str) -> str:
    return re.sub(r'\D', '', value)


class VendorAddress(BaseModel):
    name: str
    address1: str
    address2: str = ""
    city: str
    state: str
    zipcode: str
    phone: str
    country: str = "US"


class VendorCustomer(VendorAddress):
    email: str
    ip: str

    def to_vendor(self) -> dict:
        return {
            "NAME": self.name,
            "EMAIL": self.email,
            "ADDRESS1": self.address1,
            "ADDRESS2": self.address2,
            "CITY": self.city,
            "STATE": self.state,
            "COUNTRY": self.country,
            "PHONE": _digits(self.phone),
            "ZIPCODE": self.zipcode,
            "IP": self.ip,
        }


class VendorRecipient(VendorAddress):
    institution: str = ""

    def to_vendor(self) -> dict:
        return {
            "NAME": self.name,
            "INSTITUTION": self.institution,
            "ADDRESS1": self.address1,
            "ADDRESS2": self.address2,
            "CITY": self.city,
            "STATE": self.state,
            "COUNTRY": self.country,
            "PHONE": _digits(self.phone),
            "ZIPCODE": self.zipcode,
        }


class VendorOrderProduct(BaseModel):
    code: str
    price: float
    delivery_date: str
    card_message: str
    special_instructions: str = ""
    recipient: VendorRecipient

    def to_vendor(self) -> dict:
        return {
            "CODE": self.code,
            "PRICE": self.price,
            "DELIVERYDATE": self.delivery_date,
            "CARDMESSAGE": self.card_message,
            "SPECIALINSTRUCTIONS": self.special_instructions,
            "RECIPIENT": self.recipient.to_vendor(),
        }


class VendorOrderRequest(BaseModel):
    customer: VendorCustomer
    products: list[VendorOrderProduct]
    authorizenet_token: str
    order_total: float

    def to_request_body(self) -> dict:
        """
        Body of the placeorder POST.

        customer, products and ccinfo are sent as JSON strings, ordertotal as
        a number.
        """
        return {
            "customer": json.dumps(self.customer.to_vendor()),
            "products": json.dumps([product.to_vendor() for product in self.products]),
            "ccinfo": json.dumps({"AUTHORIZENET_TOKEN": self.authorizenet_token}),
            "ordertotal": self.order_total,
        }
