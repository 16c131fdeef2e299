import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit, session_rollback
from enums.order_status import OrderStatus
from exceptions.order import (
    OrderNotFoundException,
    SubmissionFailedException,
    InvalidOrderStatusException,
)
from models.cart import CartLineDTO
from models.checkout import QuoteDTO
from models.customer import CustomerDetailsDTO
from models.order import OrderCreateDTO, OrderDTO, OrderItemDTO
from models.shipping import ShippingRatesDTO
from repositories.order import OrderRepository
from services.shipping import ShippingService
from utils.weight_parser import total_weight


class OrderService:

    @staticmethod
    def compute_subtotal(lines: Iterable[CartLineDTO]) -> float:
        # Unrounded, the free shipping threshold compares against the exact sum
        return sum((line.unit_price * line.quantity for line in lines), 0.0)

    @staticmethod
    def compute_quote(
        lines: list[CartLineDTO],
        region_code: str | None,
        rates: ShippingRatesDTO | None = None
    ) -> QuoteDTO:
        """
        Compute live checkout totals for a cart.

        Pure function of its inputs: safe to call on every form change.

        Args:
            lines: Current cart lines
            region_code: Selected destination state (None if not selected)
            rates: Shipping tier parameters, defaults to config values

        Returns:
            QuoteDTO with subtotal, shipping fee, total and total weight in kg
        """
        subtotal = OrderService.compute_subtotal(lines)
        weight_kg = total_weight(lines)
        shipping_fee = ShippingService.compute_shipping(subtotal, weight_kg, region_code, rates)
        return QuoteDTO(
            subtotal=round(subtotal, 2),
            shipping_fee=shipping_fee,
            total=round(subtotal + shipping_fee, 2),
            total_weight_kg=weight_kg,
        )

    @staticmethod
    def compose_address(customer: CustomerDetailsDTO) -> str:
        """
        Flatten the structured address into one line.

        Order: address line, city, state, pincode.

        Example:
            "12 MG Road, Near Bus Stand, Surat, Gujarat - 395003"
        """
        return f"{customer.address}, {customer.city}, {customer.state} - {customer.pincode}"

    @staticmethod
    def compose_order(
        lines: list[CartLineDTO],
        shipping_fee: float,
        customer: CustomerDetailsDTO
    ) -> OrderCreateDTO:
        """
        Build the order draft from the cart.

        The items are copied into immutable OrderItemDTOs, so clearing or
        editing the cart afterwards can't change the order.
        total_amount = sum(price x quantity) + shipping_fee, as a 2-decimal string.

        Args:
            lines: Cart lines at submission time
            shipping_fee: Shipping fee quoted for this cart
            customer: Validated checkout fields

        Returns:
            OrderCreateDTO with status Processing
        """
        order_items = tuple(
            OrderItemDTO(
                product_id=line.product_id,
                name=line.name,
                price=line.unit_price,
                quantity=line.quantity,
                size_label=line.size_label,
            )
            for line in lines
        )
        subtotal = OrderService.compute_subtotal(lines)

        return OrderCreateDTO(
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            shipping_address=OrderService.compose_address(customer),
            order_items=order_items,
            shipping_fee=shipping_fee,
            total_amount=f"{subtotal + shipping_fee:.2f}",
            status=OrderStatus.PROCESSING,
        )

    @staticmethod
    async def create_order(order_draft: OrderCreateDTO, session: AsyncSession | Session) -> OrderDTO:
        """
        Persist an order draft.

        Either the whole order is stored or nothing is: any store error rolls
        back the session and is re-raised as SubmissionFailedException.

        Raises:
            SubmissionFailedException: Order store rejected or failed the insert
        """
        try:
            order = await OrderRepository.create(order_draft, session)
            await session_commit(session)
        except Exception as e:
            logging.error(f"❌ Order creation failed: {e}", exc_info=True)
            await session_rollback(session)
            raise SubmissionFailedException(reason=str(e)) from e

        logging.info(
            f"✅ Order {order.id} created (Status: {order.status.value}, "
            f"Items: {len(order.order_items)}, Total: {order.total_amount})"
        )
        return order

    @staticmethod
    async def get_order(order_id: int, session: AsyncSession | Session) -> OrderDTO:
        order = await OrderRepository.get_by_id(order_id, session)
        if order is None:
            raise OrderNotFoundException(order_id)
        return order

    @staticmethod
    async def list_orders(session: AsyncSession | Session) -> list[OrderDTO]:
        return await OrderRepository.get_all(session)

    @staticmethod
    async def update_status(
        order_id: int,
        status: OrderStatus | str,
        session: AsyncSession | Session
    ) -> OrderDTO:
        """
        Change order status (admin action).

        Args:
            order_id: Order to update
            status: New status, enum or its string value (case-insensitive)
            session: Database session

        Returns:
            Updated order

        Raises:
            InvalidOrderStatusException: status is not Processing/Shipped/Canceled
            OrderNotFoundException: order_id does not exist
        """
        if not isinstance(status, OrderStatus):
            try:
                status = OrderStatus.from_string(status)
            except ValueError:
                raise InvalidOrderStatusException(order_id, str(status))

        previous = await OrderService.get_order(order_id, session)
        await OrderRepository.update_status(order_id, status, session)
        await session_commit(session)

        logging.info(f"📦 Order {order_id} status changed: {previous.status.value} → {status.value}")
        return await OrderService.get_order(order_id, session)

    @staticmethod
    async def delete_order(order_id: int, session: AsyncSession | Session) -> None:
        deleted = await OrderRepository.delete(order_id, session)
        if not deleted:
            raise OrderNotFoundException(order_id)
        await session_commit(session)
        logging.info(f"🗑️ Order {order_id} deleted")
