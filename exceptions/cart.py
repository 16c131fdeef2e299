"""
Cart-related exceptions.
"""

from .base import StorefrontException


class CartException(StorefrontException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self):
        super().__init__("Cart is empty")


class CartItemNotFoundException(CartException):
    """Raised when a cart line for the given product and size does not exist."""

    def __init__(self, product_id: int, size_label: str | None = None):
        message = f"Cart item for product {product_id} not found"
        if size_label:
            message = f"Cart item for product {product_id} (size '{size_label}') not found"
        super().__init__(
            message,
            details={'product_id': product_id, 'size_label': size_label}
        )
        self.product_id = product_id
        self.size_label = size_label
