import logging

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush, session_refresh
from enums.order_status import OrderStatus
from models.order import Order, OrderDTO, OrderCreateDTO

logger = logging.getLogger(__name__)


class OrderRepository:
    """
    Order store.

    Repository methods only flush; the calling service owns the transaction
    and commits (or rolls back) the session.
    """

    @staticmethod
    async def create(order_dto: OrderCreateDTO, session: AsyncSession | Session) -> OrderDTO:
        """
        Insert a new order and return it with its assigned id and created_at.

        Args:
            order_dto: Composed order draft
            session: Database session (async or sync)

        Returns:
            Stored order
        """
        order = Order(
            customer_name=order_dto.customer_name,
            customer_email=order_dto.customer_email,
            customer_phone=order_dto.customer_phone,
            shipping_address=order_dto.shipping_address,
            order_items=order_dto.order_items_json(),
            shipping_fee=order_dto.shipping_fee,
            total_amount=order_dto.total_amount,
            status=order_dto.status,
        )
        session.add(order)
        await session_flush(session)
        await session_refresh(session, order)
        logger.debug(f"Inserted order {order.id} ({len(order_dto.order_items)} items)")
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_by_id(order_id: int, session: AsyncSession | Session) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        result = await session_execute(stmt, session)
        order = result.scalar()
        if order is not None:
            return OrderDTO.model_validate(order, from_attributes=True)
        else:
            return None

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> list[OrderDTO]:
        """Get all orders, newest first."""
        stmt = select(Order).order_by(Order.created_at.desc(), Order.id.desc())
        result = await session_execute(stmt, session)
        return [OrderDTO.model_validate(order, from_attributes=True) for order in result.scalars().all()]

    @staticmethod
    async def update_status(order_id: int, status: OrderStatus, session: AsyncSession | Session) -> bool:
        """
        Set order status.

        Returns:
            True if an order was updated, False if order_id does not exist
        """
        stmt = update(Order).where(Order.id == order_id).values(status=status)
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def delete(order_id: int, session: AsyncSession | Session) -> bool:
        """
        Delete an order.

        Returns:
            True if an order was deleted, False if order_id does not exist
        """
        stmt = delete(Order).where(Order.id == order_id)
        result = await session_execute(stmt, session)
        return result.rowcount > 0
