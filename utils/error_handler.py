"""
Error Handler Utility for API Routers

Maps service exceptions to user-facing messages and HTTP status codes:
- Consistent messages across endpoints
- Submission failures always show the same generic text
- Logging for debugging

Usage in routers:
    from utils.error_handler import handle_service_error, status_code_for

    try:
        result = await SomeService.some_method()
    except StorefrontException as e:
        raise HTTPException(status_code_for(e), detail=handle_service_error(e))
"""

import logging

from fastapi import status

from exceptions import (
    StorefrontException,
    EmptyCartException,
    CartItemNotFoundException,
    ValidationFailedException,
    OrderNotFoundException,
    SubmissionFailedException,
    SubmissionInProgressException,
    InvalidOrderStatusException,
)

ERROR_MESSAGES: dict[type[StorefrontException], str] = {
    # Cart exceptions
    EmptyCartException: "Your cart is empty. Please add some items before checking out.",
    CartItemNotFoundException: "This item is no longer in your cart.",

    # Checkout exceptions
    ValidationFailedException: "Please correct the highlighted fields.",

    # Order exceptions
    OrderNotFoundException: "Order not found",
    SubmissionFailedException: "Failed to create order",
    SubmissionInProgressException: "Your order is already being placed. Please wait.",
    InvalidOrderStatusException: "Invalid status. Use Processing, Shipped or Canceled.",
}

STATUS_CODES: dict[type[StorefrontException], int] = {
    EmptyCartException: status.HTTP_400_BAD_REQUEST,
    CartItemNotFoundException: status.HTTP_404_NOT_FOUND,
    ValidationFailedException: status.HTTP_422_UNPROCESSABLE_CONTENT,
    OrderNotFoundException: status.HTTP_404_NOT_FOUND,
    SubmissionFailedException: status.HTTP_502_BAD_GATEWAY,
    SubmissionInProgressException: status.HTTP_409_CONFLICT,
    InvalidOrderStatusException: status.HTTP_400_BAD_REQUEST,
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def handle_service_error(exception: StorefrontException) -> str:
    """
    Convert service exception to a user-friendly error message.

    Args:
        exception: The custom exception raised by a service

    Returns:
        Message safe to show to customers (no internal details)

    Example:
        try:
            order = await OrderService.get_order(123, session)
        except OrderNotFoundException as e:
            message = handle_service_error(e)
    """
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    message = ERROR_MESSAGES.get(type(exception))
    if message is None:
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return GENERIC_ERROR_MESSAGE
    return message


def status_code_for(exception: StorefrontException) -> int:
    """HTTP status code for a service exception (500 if unmapped)."""
    return STATUS_CODES.get(type(exception), status.HTTP_500_INTERNAL_SERVER_ERROR)
