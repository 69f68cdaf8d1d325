# A cart is never stored by the storefront itself. Live carts are held by the
# vendor as a flat list (one row per physical unit, no quantity field) and are
# fetched fresh on every request; mock carts are a small JSON document kept in
# the customer's cookie. Both are presented to the client as the same
# SKU-aggregated CartView.
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from utils.validation import validate_sku, validate_item_id


class CartItemDTO(BaseModel):
    """One SKU line with its quantity (mock cookie payload and aggregated view)."""
    sku: str
    name: str
    price: float
    quantity: int = Field(ge=1)


class MockCartPayload(BaseModel):
    """Document stored in the flo_mock_cart cookie."""
    items: list[CartItemDTO] = Field(default_factory=list)


class CartLineDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item_id: str
    sku: str
    name: str
    price: float
    quantity: int


class CartView(BaseModel):
    """Uniform cart representation returned by every cart endpoint."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cart_id: str | None = None
    items: list[CartLineDTO] = Field(default_factory=list)
    subtotal: float = 0.0
    # Unknown until a ZIP and delivery date are priced by checkout/get-total
    delivery_fee: float | None = None
    service_fee: float = 0.0
    total: float = 0.0
    is_empty: bool = True
    mock: bool = False

    @classmethod
    def from_items(cls, cart_id: str | None, items: list[CartItemDTO], item_id_prefix: str, mock: bool) -> "CartView":
        subtotal = round(sum(item.price * item.quantity for item in items), 2)
        lines = [
            CartLineDTO(
                item_id=f"{item_id_prefix}{idx}",
                sku=item.sku,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
            )
            for idx, item in enumerate(items)
        ]
        return cls(
            cart_id=cart_id,
            items=lines,
            subtotal=subtotal,
            total=subtotal,
            is_empty=len(lines) == 0,
            mock=mock,
        )

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)


class AddToCartRequest(BaseModel):
    sku: str
    quantity: int = 1

    @field_validator('sku', mode='before')
    @classmethod
    def _validate_sku(cls, value):
        return validate_sku(value)

    @field_validator('quantity')
    @classmethod
    def _validate_quantity(cls, value: int) -> int:
        if not 1 <= value <= 99:
            raise ValueError("Quantity must be an integer between 1 and 99")
        return value


class RemoveFromCartRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item_id: str | None = None
    sku: str | None = None

    @field_validator('item_id', mode='before')
    @classmethod
    def _validate_item_id(cls, value):
        return validate_item_id(value) if value else None

    @field_validator('sku', mode='before')
    @classmethod
    def _validate_sku(cls, value):
        return validate_sku(value) if value else None

    @model_validator(mode='after')
    def _require_reference(self):
        if not self.item_id and not self.sku:
            raise ValueError("Either itemId or sku is required")
        return self


class UpdateQuantityRequest(BaseModel):
    sku: str
    quantity: int

    @field_validator('sku', mode='before')
    @classmethod
    def _validate_sku(cls, value):
        return validate_sku(value)

    @field_validator('quantity')
    @classmethod
    def _validate_quantity(cls, value: int) -> int:
        if not 0 <= value <= 99:
            raise ValueError("Quantity must be between 0 and 99")
        return value


FIELD_LABELS = {
    'sku': 'SKU',
    'quantity': 'Quantity',
    'itemId': 'Item ID',
    'item_id': 'Item ID',
}
