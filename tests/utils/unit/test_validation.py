"""
Unit Tests: Input Validation

Tests for utils/validation.py and the request models covering:
- field validators (slug, SKU, ZIP, date, email, phone, state)
- require() mapping to ValidationException
- request models (add, remove, update-quantity, place-order)
- format_validation_error() customer-facing messages
"""

import pytest
from pydantic import ValidationError

from exceptions import ValidationException
from models.cart import FIELD_LABELS, AddToCartRequest, RemoveFromCartRequest, UpdateQuantityRequest
from models.order import PlaceOrderRequest
from utils.validation import (
    format_validation_error,
    require,
    validate_date,
    validate_email,
    validate_phone,
    validate_sku,
    validate_slug,
    validate_state_abbr,
    validate_zip,
)


class TestValidators:

    def test_slug_normalized(self):
        assert validate_slug(" New-York ") == "new-york"

    @pytest.mark.parametrize("value", ["new york", "ny/nyc", "", "x" * 51, 42])
    def test_bad_slugs(self, value):
        with pytest.raises(ValueError):
            validate_slug(value)

    def test_sku(self):
        assert validate_sku(" MOCK-BD-001 ") == "MOCK-BD-001"
        with pytest.raises(ValueError, match="letters, numbers, and hyphens"):
            validate_sku("BAD SKU")

    @pytest.mark.parametrize("value", ["1234", "123456", "1234a", None])
    def test_bad_zip(self, value):
        with pytest.raises(ValueError):
            validate_zip(value)

    def test_date_rejects_impossible_days(self):
        assert validate_date("2025-02-28") == "2025-02-28"
        with pytest.raises(ValueError, match="Invalid date"):
            validate_date("2025-02-30")
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            validate_date("02/28/2025")

    def test_email_lowercased(self):
        assert validate_email("Jane@Example.COM") == "jane@example.com"
        with pytest.raises(ValueError):
            validate_email("jane@example")

    def test_phone_digits_only(self):
        assert validate_phone("+1 (212) 555-0101") == "12125550101"
        with pytest.raises(ValueError):
            validate_phone("555-0101")

    def test_state(self):
        assert validate_state_abbr("ny") == "NY"
        with pytest.raises(ValueError):
            validate_state_abbr("XX")

    def test_require_wraps_value_error(self):
        with pytest.raises(ValidationException) as exc_info:
            require(validate_zip, "abc", "zip")

        assert exc_info.value.status_code == 400
        assert exc_info.value.field == "zip"
        assert exc_info.value.message == "ZIP code must be exactly 5 digits"


class TestCartRequests:

    def test_add_defaults_quantity_to_one(self):
        assert AddToCartRequest.model_validate({"sku": "ABC"}).quantity == 1

    @pytest.mark.parametrize("quantity", [0, 100, -1])
    def test_add_quantity_bounds(self, quantity):
        with pytest.raises(ValidationError) as exc_info:
            AddToCartRequest.model_validate({"sku": "ABC", "quantity": quantity})

        assert format_validation_error(exc_info.value, FIELD_LABELS) == "Quantity must be an integer between 1 and 99"

    def test_add_missing_sku_message(self):
        with pytest.raises(ValidationError) as exc_info:
            AddToCartRequest.model_validate({"quantity": 2})

        assert format_validation_error(exc_info.value, FIELD_LABELS) == "SKU is required"

    def test_update_quantity_allows_zero(self):
        assert UpdateQuantityRequest.model_validate({"sku": "ABC", "quantity": 0}).quantity == 0
        with pytest.raises(ValidationError):
            UpdateQuantityRequest.model_validate({"sku": "ABC", "quantity": 100})

    def test_remove_by_item_id_or_sku(self):
        assert RemoveFromCartRequest.model_validate({"itemId": "item_0"}).item_id == "item_0"
        assert RemoveFromCartRequest.model_validate({"sku": "ABC"}).sku == "ABC"

    def test_remove_requires_a_reference(self):
        with pytest.raises(ValidationError) as exc_info:
            RemoveFromCartRequest.model_validate({})

        assert format_validation_error(exc_info.value, FIELD_LABELS) == "Either itemId or sku is required"


class TestPlaceOrderRequest:

    @pytest.fixture
    def body(self):
        return {
            "deliveryDate": "2025-06-14",
            "recipient": {
                "firstName": "Jane", "lastName": "Doe", "phone": "2125550101",
                "address1": "1 Main Street", "city": "New York", "state": "NY", "zip": "10001",
            },
            "sender": {"firstName": "John", "lastName": "Smith", "email": "john@example.com", "phone": "2125550199"},
            "card": {"message": "Happy birthday!"},
            "paymentToken": "tok_1",
        }

    def test_valid_body(self, body):
        request = PlaceOrderRequest.model_validate(body)

        assert request.recipient.full_name == "Jane Doe"
        assert request.card.full_message == "Happy birthday!"
        assert request.special_instructions is None

    def test_nested_errors_prefixed_with_section(self, body):
        body["recipient"]["firstName"] = "  "
        body["recipient"]["zip"] = "100"

        with pytest.raises(ValidationError) as exc_info:
            PlaceOrderRequest.model_validate(body)

        message = format_validation_error(exc_info.value, PlaceOrderRequest.FIELD_LABELS)
        assert message == "Recipient: First name is required; ZIP code must be exactly 5 digits"

    def test_missing_section(self, body):
        del body["sender"]

        with pytest.raises(ValidationError) as exc_info:
            PlaceOrderRequest.model_validate(body)

        assert format_validation_error(exc_info.value, PlaceOrderRequest.FIELD_LABELS) == "Sender is required"

    def test_payment_token_is_optional_at_model_level(self, body):
        del body["paymentToken"]

        assert PlaceOrderRequest.model_validate(body).payment_token is None
