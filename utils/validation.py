"""
Input validators shared by request models and route handlers.

Each validator returns the normalized value or raises ValueError with a
message that is safe to show to the customer.
"""

import re
from datetime import datetime

from pydantic import ValidationError

from exceptions import ValidationException

SLUG_PATTERN = re.compile(r'^[a-z0-9-]+$')
SKU_PATTERN = re.compile(r'^[A-Za-z0-9-]+$')
ZIP_PATTERN = re.compile(r'^\d{5}$')
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

US_STATES = {
    'AL', 'AK', 'AZ', 'AR', 'CA', 'CO', 'CT', 'DE', 'FL', 'GA',
    'HI', 'ID', 'IL', 'IN', 'IA', 'KS', 'KY', 'LA', 'ME', 'MD',
    'MA', 'MI', 'MN', 'MS', 'MO', 'MT', 'NE', 'NV', 'NH', 'NJ',
    'NM', 'NY', 'NC', 'ND', 'OH', 'OK', 'OR', 'PA', 'RI', 'SC',
    'SD', 'TN', 'TX', 'UT', 'VT', 'VA', 'WA', 'WV', 'WI', 'WY', 'DC',
}


def validate_slug(value) -> str:
    if not isinstance(value, str):
        raise ValueError("Slug must be a string")
    slug = value.lower().strip()
    if not SLUG_PATTERN.match(slug):
        raise ValueError("Slug must contain only lowercase letters, numbers, and hyphens")
    if len(slug) > 50:
        raise ValueError("Slug must be between 1 and 50 characters")
    return slug


def validate_sku(value) -> str:
    if not isinstance(value, str):
        raise ValueError("SKU must be a string")
    sku = value.strip()
    if not SKU_PATTERN.match(sku):
        raise ValueError("SKU must contain only letters, numbers, and hyphens")
    if len(sku) > 50:
        raise ValueError("SKU must be between 1 and 50 characters")
    return sku


def validate_item_id(value) -> str:
    if not isinstance(value, str):
        raise ValueError("Item ID must be a string")
    item_id = value.strip()
    if not 1 <= len(item_id) <= 100:
        raise ValueError("Item ID must be between 1 and 100 characters")
    return item_id


def validate_zip(value) -> str:
    if not isinstance(value, str):
        raise ValueError("ZIP code must be a string")
    zip_code = value.strip()
    if not ZIP_PATTERN.match(zip_code):
        raise ValueError("ZIP code must be exactly 5 digits")
    return zip_code


def validate_date(value) -> str:
    """Accepts YYYY-MM-DD and rejects impossible dates like 2025-02-30."""
    if not isinstance(value, str):
        raise ValueError("Date must be a string")
    date_str = value.strip()
    if not DATE_PATTERN.match(date_str):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError:
        raise ValueError("Invalid date")
    return date_str


def validate_email(value) -> str:
    if not isinstance(value, str):
        raise ValueError("Email must be a string")
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email address")
    return email


def validate_phone(value) -> str:
    """Returns digits only; US numbers with or without the leading 1."""
    if not isinstance(value, str):
        raise ValueError("Phone must be a string")
    digits = re.sub(r'\D', '', value)
    if not 10 <= len(digits) <= 11:
        raise ValueError("Phone must be a valid US phone number")
    return digits


def validate_state_abbr(value) -> str:
    if not isinstance(value, str):
        raise ValueError("State must be a string")
    state = value.strip().upper()
    if state not in US_STATES:
        raise ValueError("Invalid state abbreviation")
    return state


def validate_required_string(value, label: str, min_length: int = 1, max_length: int = 500) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    text = value.strip()
    if len(text) < min_length:
        raise ValueError(f"{label} is required")
    if len(text) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters")
    return text


def validate_optional_string(value, label: str, max_length: int = 500) -> str | None:
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    text = value.strip()
    if len(text) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters")
    return text or None


def require(validator, value, field: str, *args):
    """
    Run a validator at the API boundary.

    Raises:
        ValidationException: With the validator's message
    """
    try:
        return validator(value, *args)
    except ValueError as e:
        raise ValidationException(str(e), field=field)


def format_validation_error(exc: ValidationError, labels: dict[str, str] | None = None) -> str:
    """
    Collapse a pydantic ValidationError into one customer-facing line.

    Messages from our own validators are kept as-is; pydantic's built-in
    messages for missing or mistyped fields are rewritten with the field's
    label. Nested model errors are prefixed with the section label, e.g.
    "Recipient: First name is required; Phone must be a valid US phone number".
    """
    labels = labels or {}
    sections: dict[str, list[str]] = {}

    for error in exc.errors():
        loc = [str(part) for part in error.get('loc', ())]
        section = labels.get(loc[0], loc[0]) if len(loc) > 1 else ""
        field = loc[-1] if loc else ""
        label = labels.get(field, field)

        if error['type'] == 'missing':
            message = f"{label} is required"
        elif error['type'] in ('string_type', 'int_type', 'int_parsing', 'float_type', 'float_parsing'):
            kind = "a string" if error['type'] == 'string_type' else "a number"
            message = f"{label} must be {kind}"
        elif error['type'] == 'model_type' or error['type'] == 'model_attributes_type':
            message = f"{label} data is required"
        else:
            message = error['msg'].removeprefix("Value error, ")

        sections.setdefault(section, []).append(message)

    parts = []
    for section, messages in sections.items():
        joined = "; ".join(messages)
        parts.append(f"{section}: {joined}" if section else joined)
    return " | ".join(parts)
