"""
Checkout Service

Runs the order pipeline for one shopper session:
cart -> weight -> shipping -> totals -> order store -> WhatsApp handoff link.

The cart is cleared only after the order store confirmed the order. A failed
submission leaves the cart untouched so the customer can simply retry.
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from exceptions.cart import EmptyCartException
from exceptions.order import SubmissionFailedException, SubmissionInProgressException
from models.checkout import CheckoutResultDTO, QuoteDTO
from models.customer import CustomerDetailsDTO
from models.shipping import ShippingRatesDTO
from repositories.setting import SettingRepository
from services.cart import CartStore
from services.handoff_formatter import HandoffFormatterService
from services.order import OrderService
from utils.checkout_validation import validate_customer_fields

logger = logging.getLogger(__name__)


class CheckoutService:
    """Checkout pipeline bound to one cart."""

    def __init__(self, cart: CartStore, rates: ShippingRatesDTO | None = None):
        self.cart = cart
        self.rates = rates
        self._submission_in_flight = False

    @property
    def is_submitting(self) -> bool:
        return self._submission_in_flight

    def compute_quote(self, region_code: str | None) -> QuoteDTO:
        """Live totals for the current cart and selected state."""
        return OrderService.compute_quote(self.cart.lines, region_code, self.rates)

    async def submit_order(
        self,
        customer_fields: CustomerDetailsDTO | dict[str, Any],
        session: AsyncSession | Session
    ) -> CheckoutResultDTO:
        """
        Place the order for the current cart.

        Steps:
        1. Reject re-entry while a submission is in flight
        2. Reject an empty cart
        3. Validate customer fields (no store call on failure)
        4. Quote shipping for the customer's state and compose the order
        5. Read the WhatsApp number, then create the order
        6. Clear the cart and build the handoff link

        Args:
            customer_fields: Checkout form data
            session: Database session

        Returns:
            CheckoutResultDTO(order, handoff_url); handoff_url is None when no
            WhatsApp number is configured

        Raises:
            SubmissionInProgressException: Previous submission not settled yet
            EmptyCartException: Nothing to order
            ValidationFailedException: Customer fields invalid
            SubmissionFailedException: Order store failed, cart unchanged
        """
        if self._submission_in_flight:
            raise SubmissionInProgressException()

        self._submission_in_flight = True
        try:
            lines = self.cart.lines
            if not lines:
                raise EmptyCartException()

            customer = validate_customer_fields(customer_fields)

            quote = OrderService.compute_quote(lines, customer.state, self.rates)
            order_draft = OrderService.compose_order(lines, quote.shipping_fee, customer)

            try:
                destination_number = await SettingRepository.get_destination_number(session)
            except SQLAlchemyError as e:
                logger.error(f"Failed to read WhatsApp number: {e}", exc_info=True)
                raise SubmissionFailedException(reason=str(e)) from e

            order = await OrderService.create_order(order_draft, session)

            self.cart.clear()

            handoff_url = HandoffFormatterService.create_handoff_link(
                order,
                customer,
                quote.shipping_fee,
                quote.total_weight_kg,
                destination_number
            )
            return CheckoutResultDTO(order=order, handoff_url=handoff_url)
        finally:
            self._submission_in_flight = False
