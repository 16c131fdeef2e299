"""
Checkout Form Validation Utility

Validates customer fields before an order is submitted. Failures are
reported per field and never reach the order store.
"""

import logging
from typing import Any

from pydantic import ValidationError

from exceptions.checkout import ValidationFailedException
from models.customer import CustomerDetailsDTO

logger = logging.getLogger(__name__)

FIELD_ERROR_MESSAGES: dict[str, str] = {
    "name": "Name must be at least 2 characters",
    "email": "Invalid email address",
    "phone": "Phone number must be at least 10 characters",
    "address": "Address must be at least 10 characters",
    "city": "City must be at least 2 characters",
    "state": "Please select a state",
    "pincode": "Pincode must be at least 6 characters",
}


def validate_customer_fields(fields: CustomerDetailsDTO | dict[str, Any]) -> CustomerDetailsDTO:
    """
    Validate raw checkout form input.

    Args:
        fields: Form data as dict, or an already constructed CustomerDetailsDTO

    Returns:
        CustomerDetailsDTO with surrounding whitespace stripped

    Raises:
        ValidationFailedException: With field_errors = {field: message}

    Example:
        >>> validate_customer_fields({"name": "A", ...})
        ValidationFailedException: Invalid checkout fields: name
    """
    if isinstance(fields, CustomerDetailsDTO):
        # Re-validate, the DTO may have been built with model_construct()
        fields = fields.model_dump()

    try:
        return CustomerDetailsDTO.model_validate(fields)
    except ValidationError as e:
        field_errors: dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            if field in field_errors:
                continue
            if error["type"] == "string_type":
                # Wrong JSON type (list, object, bool), length rules don't apply
                field_errors[field] = f"{field.capitalize()} must be text"
            else:
                field_errors[field] = FIELD_ERROR_MESSAGES.get(field, error["msg"])
        logger.info(f"Checkout validation failed for fields: {', '.join(sorted(field_errors))}")
        raise ValidationFailedException(field_errors) from e
