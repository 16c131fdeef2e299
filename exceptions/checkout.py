"""
Checkout-related exceptions.
"""

from .base import StorefrontException


class CheckoutException(StorefrontException):
    """Base exception for checkout form errors."""
    pass


class ValidationFailedException(CheckoutException):
    """
    Raised when customer fields fail validation before submission.

    Attributes:
        field_errors: Mapping of field name to the first error message for it
    """

    def __init__(self, field_errors: dict[str, str]):
        fields = ', '.join(sorted(field_errors))
        super().__init__(
            f"Invalid checkout fields: {fields}",
            details={'field_errors': field_errors}
        )
        self.field_errors = field_errors
