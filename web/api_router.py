"""
Public API router for the storefront checkout.

The cart lives on the client, so every request carries the cart lines.
Endpoints:
- POST /api/checkout/quote   live totals while the form is edited
- POST /api/orders           place the order, returns the WhatsApp handoff link
- GET  /api/settings/whatsapp  destination number for the "order on WhatsApp" button
"""

import logging
import uuid
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from exceptions import StorefrontException, ValidationFailedException
from models.cart import CartLineDTO
from models.checkout import CheckoutResultDTO, QuoteDTO
from repositories.setting import SettingRepository
from services.cart import CartStore
from services.checkout import CheckoutService
from utils.error_handler import handle_service_error, status_code_for

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api", tags=["api"])

# Checkouts with a submission in flight, keyed by the client's cart id
_active_checkouts: dict[str, CheckoutService] = {}


def generate_correlation_id() -> str:
    """Generate unique correlation ID for request tracing."""
    return f"{datetime.now().strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"


class QuoteRequest(BaseModel):
    items: list[CartLineDTO] = []
    region: str | None = None


class OrderRequest(BaseModel):
    """Cart snapshot plus checkout form of one submission."""
    cart_id: str | None = Field(default=None, max_length=64, description="Client cart id, guards double submits")
    items: list[CartLineDTO] = []
    customer: dict[str, Any] = {}


class WhatsAppNumberResponse(BaseModel):
    whatsapp_number: str | None = None


def _checkout_for(payload: OrderRequest) -> CheckoutService:
    if payload.cart_id and payload.cart_id in _active_checkouts:
        # Same cart still being submitted, its service rejects the re-entry
        return _active_checkouts[payload.cart_id]
    return CheckoutService(CartStore(payload.items))


def _to_http_exception(e: StorefrontException, correlation_id: str) -> HTTPException:
    status_code = status_code_for(e)
    if isinstance(e, ValidationFailedException):
        detail = {"message": handle_service_error(e), "field_errors": e.field_errors}
    else:
        detail = handle_service_error(e)
    logger.info(f"[{correlation_id}] Responding {status_code}: {type(e).__name__}")
    return HTTPException(status_code=status_code, detail=detail)


@api_router.post("/checkout/quote", response_model=QuoteDTO)
async def checkout_quote(payload: QuoteRequest) -> QuoteDTO:
    """
    Live checkout totals.

    Request Body:
        {"items": [{"product_id": 1, "name": "Almonds", "unit_price": 1000, "quantity": 1, "size_label": "500g"}],
         "region": "Gujarat"}

    Returns:
        {"subtotal": 1000.0, "shipping_fee": 50.0, "total": 1050.0, "total_weight_kg": 0.5}
    """
    return CheckoutService(CartStore(payload.items)).compute_quote(payload.region)


@api_router.post("/orders", response_model=CheckoutResultDTO, status_code=status.HTTP_201_CREATED)
async def create_order(payload: OrderRequest, session: AsyncSession = Depends(get_session)) -> CheckoutResultDTO:
    """
    Place an order for the submitted cart.

    Returns:
        201: {"order": {...}, "handoff_url": "https://wa.me/...?" | null}
        400: Empty cart
        409: Same cart_id is already being submitted
        422: {"detail": {"message": ..., "field_errors": {"email": "Invalid email address"}}}
        502: Order could not be stored, client keeps its cart
    """
    correlation_id = generate_correlation_id()
    logger.info(f"[{correlation_id}] Processing order submission ({len(payload.items)} lines)")

    checkout = _checkout_for(payload)
    owns_slot = bool(payload.cart_id) and payload.cart_id not in _active_checkouts
    if owns_slot:
        _active_checkouts[payload.cart_id] = checkout

    try:
        result = await checkout.submit_order(payload.customer, session)
    except StorefrontException as e:
        raise _to_http_exception(e, correlation_id)
    finally:
        if owns_slot:
            _active_checkouts.pop(payload.cart_id, None)

    logger.info(
        f"[{correlation_id}] ✅ Order {result.order.id} placed "
        f"(handoff: {'yes' if result.handoff_url else 'no number configured'})"
    )
    return result


@api_router.get("/settings/whatsapp", response_model=WhatsAppNumberResponse)
async def get_whatsapp_number(session: AsyncSession = Depends(get_session)) -> WhatsAppNumberResponse:
    number = await SettingRepository.get_destination_number(session)
    return WhatsAppNumberResponse(whatsapp_number=number)
