from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from utils.validation import (
    validate_date,
    validate_email,
    validate_optional_string,
    validate_phone,
    validate_required_string,
    validate_state_abbr,
    validate_zip,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecipientDTO(_CamelModel):
    first_name: str
    last_name: str
    phone: str
    address1: str
    address2: str | None = None
    city: str
    state: str
    zip: str

    @field_validator('first_name', mode='before')
    @classmethod
    def _first_name(cls, value):
        return validate_required_string(value, 'First name', 1, 50)

    @field_validator('last_name', mode='before')
    @classmethod
    def _last_name(cls, value):
        return validate_required_string(value, 'Last name', 1, 50)

    @field_validator('phone', mode='before')
    @classmethod
    def _phone(cls, value):
        return validate_phone(value)

    @field_validator('address1', mode='before')
    @classmethod
    def _address1(cls, value):
        return validate_required_string(value, 'Address', 1, 200)

    @field_validator('address2', mode='before')
    @classmethod
    def _address2(cls, value):
        return validate_optional_string(value, 'Address line 2', 200)

    @field_validator('city', mode='before')
    @classmethod
    def _city(cls, value):
        return validate_required_string(value, 'City', 1, 100)

    @field_validator('state', mode='before')
    @classmethod
    def _state(cls, value):
        return validate_state_abbr(value)

    @field_validator('zip', mode='before')
    @classmethod
    def _zip(cls, value):
        return validate_zip(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class SenderDTO(_CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str

    @field_validator('first_name', mode='before')
    @classmethod
    def _first_name(cls, value):
        return validate_required_string(value, 'First name', 1, 50)

    @field_validator('last_name', mode='before')
    @classmethod
    def _last_name(cls, value):
        return validate_required_string(value, 'Last name', 1, 50)

    @field_validator('email', mode='before')
    @classmethod
    def _email(cls, value):
        return validate_email(value)

    @field_validator('phone', mode='before')
    @classmethod
    def _phone(cls, value):
        return validate_phone(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CardDTO(_CamelModel):
    message: str
    signature: str | None = None

    @field_validator('message', mode='before')
    @classmethod
    def _message(cls, value):
        return validate_required_string(value, 'Card message', 1, 1000)

    @field_validator('signature', mode='before')
    @classmethod
    def _signature(cls, value):
        return validate_optional_string(value, 'Signature', 200)

    @property
    def full_message(self) -> str:
        """Card text as printed: message, blank line, signature."""
        if self.signature:
            return f"{self.message}\n\n{self.signature}"
        return self.message


class PlaceOrderRequest(_CamelModel):
    FIELD_LABELS: ClassVar[dict[str, str]] = {
        'deliveryDate': 'Delivery date',
        'recipient': 'Recipient',
        'sender': 'Sender',
        'card': 'Card',
        'specialInstructions': 'Special instructions',
        'paymentToken': 'Payment token',
        'firstName': 'First name',
        'lastName': 'Last name',
        'phone': 'Phone',
        'email': 'Email',
        'address1': 'Address',
        'address2': 'Address line 2',
        'city': 'City',
        'state': 'State',
        'zip': 'ZIP code',
        'message': 'Card message',
        'signature': 'Signature',
    }

    delivery_date: str
    recipient: RecipientDTO
    sender: SenderDTO
    card: CardDTO
    special_instructions: str | None = None
    # Opaque token from the client-side tokenizer; card data never reaches us
    payment_token: str | None = None

    @field_validator('delivery_date', mode='before')
    @classmethod
    def _delivery_date(cls, value):
        return validate_date(value)

    @field_validator('special_instructions', mode='before')
    @classmethod
    def _special_instructions(cls, value):
        return validate_optional_string(value, 'Special instructions', 1000)

    @field_validator('payment_token', mode='before')
    @classmethod
    def _payment_token(cls, value):
        return validate_optional_string(value, 'Payment token', 2000)


class OrderTotalDTO(BaseModel):
    """Authoritative checkout figures, all USD and two-decimal rounded."""
    subtotal: float = 0.0
    delivery: float = 0.0
    tax: float = 0.0
    total: float = 0.0

    @classmethod
    def zero(cls) -> "OrderTotalDTO":
        return cls()


class PlacedOrderDTO(_CamelModel):
    order_id: str
    confirmation_number: str
    mock: bool = False

    def to_response(self) -> dict:
        data = self.model_dump(by_alias=True)
        if not self.mock:
            data.pop('mock')
        return data
