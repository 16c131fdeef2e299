"""
Admin API router: order management and the WhatsApp destination number.

Every route requires the X-Admin-Token header matching config.ADMIN_API_TOKEN
(timing-safe comparison). With no token configured the admin API is disabled.
"""

import hmac
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

import config
from db import get_session, session_commit
from enums.setting_key import SettingKey
from exceptions import StorefrontException
from models.order import OrderDTO
from repositories.setting import SettingRepository
from services.order import OrderService
from utils.error_handler import handle_service_error, status_code_for

logger = logging.getLogger(__name__)


async def require_admin_token(x_admin_token: str | None = Header(default=None)) -> None:
    if not config.ADMIN_API_TOKEN:
        logger.warning("Admin request rejected: ADMIN_API_TOKEN not configured")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin API disabled")

    if x_admin_token is None or not hmac.compare_digest(x_admin_token, config.ADMIN_API_TOKEN):
        logger.warning("Admin request rejected: invalid or missing X-Admin-Token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


admin_router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin_token)],
)


class StatusUpdateRequest(BaseModel):
    status: str = Field(..., description="Processing, Shipped or Canceled")


class WhatsAppNumberRequest(BaseModel):
    whatsapp_number: str | None = Field(default=None, max_length=32)


def _raise_http(e: StorefrontException):
    raise HTTPException(status_code=status_code_for(e), detail=handle_service_error(e))


@admin_router.get("/orders", response_model=list[OrderDTO])
async def list_orders(session: AsyncSession = Depends(get_session)) -> list[OrderDTO]:
    """All orders, newest first."""
    return await OrderService.list_orders(session)


@admin_router.get("/orders/{order_id}", response_model=OrderDTO)
async def get_order(order_id: int, session: AsyncSession = Depends(get_session)) -> OrderDTO:
    try:
        return await OrderService.get_order(order_id, session)
    except StorefrontException as e:
        _raise_http(e)


@admin_router.put("/orders/{order_id}/status", response_model=OrderDTO)
async def update_order_status(
        order_id: int,
        payload: StatusUpdateRequest,
        session: AsyncSession = Depends(get_session)
) -> OrderDTO:
    try:
        return await OrderService.update_status(order_id, payload.status, session)
    except StorefrontException as e:
        _raise_http(e)


@admin_router.delete("/orders/{order_id}")
async def delete_order(order_id: int, session: AsyncSession = Depends(get_session)):
    try:
        await OrderService.delete_order(order_id, session)
    except StorefrontException as e:
        _raise_http(e)
    return {"success": True, "order_id": order_id}


@admin_router.put("/settings/whatsapp")
async def set_whatsapp_number(payload: WhatsAppNumberRequest, session: AsyncSession = Depends(get_session)):
    """
    Set the number orders are handed off to. Blank or null removes it,
    checkout then falls back to the plain confirmation.
    """
    number = (payload.whatsapp_number or "").strip()
    if number:
        await SettingRepository.set(
            SettingKey.WHATSAPP_NUMBER.value,
            number,
            session,
            description="WhatsApp number receiving order messages"
        )
        logger.info("📱 WhatsApp destination number updated")
    else:
        await SettingRepository.delete(SettingKey.WHATSAPP_NUMBER.value, session)
        logger.info("📱 WhatsApp destination number removed")
    await session_commit(session)
    return {"whatsapp_number": number or None}
