"""
Order-related exceptions.
"""

from .base import StorefrontException


class OrderException(StorefrontException):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundException(OrderException):
    """Raised when order is not found in database."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Order {order_id} not found",
            details={'order_id': order_id}
        )
        self.order_id = order_id


class SubmissionFailedException(OrderException):
    """
    Raised when the order store rejects or fails to persist a new order.

    Carries the underlying error as ``reason`` for logs only; users always
    see the same generic failure message.
    """

    def __init__(self, reason: str | None = None):
        message = "Failed to create order"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={'reason': reason})
        self.reason = reason


class SubmissionInProgressException(OrderException):
    """Raised when an order is submitted while a previous submission is still in flight."""

    def __init__(self):
        super().__init__("An order submission is already in progress")


class InvalidOrderStatusException(OrderException):
    """Raised when a status outside Processing/Shipped/Canceled is requested."""

    def __init__(self, order_id: int, status: str):
        super().__init__(
            f"Invalid status '{status}' for order {order_id}",
            details={'order_id': order_id, 'status': status}
        )
        self.order_id = order_id
        self.status = status
