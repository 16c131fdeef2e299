"""
Custom exceptions for the storefront.

Exception Hierarchy:
--------------------
StorefrontException (base)
├── CartException
│   ├── EmptyCartException
│   └── CartItemNotFoundException
├── CheckoutException
│   └── ValidationFailedException
└── OrderException
    ├── OrderNotFoundException
    ├── SubmissionFailedException
    ├── SubmissionInProgressException
    └── InvalidOrderStatusException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id=123)

Routers catch and translate them into HTTP responses:
    try:
        await OrderService.get_order(order_id, session)
    except OrderNotFoundException as e:
        raise HTTPException(status_code=404, detail=handle_service_error(e))
"""

from .base import StorefrontException
from .cart import CartException, EmptyCartException, CartItemNotFoundException
from .checkout import CheckoutException, ValidationFailedException
from .order import (
    OrderException,
    OrderNotFoundException,
    SubmissionFailedException,
    SubmissionInProgressException,
    InvalidOrderStatusException,
)

__all__ = [
    # Base
    'StorefrontException',

    # Cart
    'CartException',
    'EmptyCartException',
    'CartItemNotFoundException',

    # Checkout
    'CheckoutException',
    'ValidationFailedException',

    # Order
    'OrderException',
    'OrderNotFoundException',
    'SubmissionFailedException',
    'SubmissionInProgressException',
    'InvalidOrderStatusException',
]
