from pydantic import BaseModel

from models.order import OrderDTO


class QuoteDTO(BaseModel):
    """Live checkout totals, recomputed whenever cart or region changes."""
    subtotal: float
    shipping_fee: float
    total: float
    total_weight_kg: float


class CheckoutResultDTO(BaseModel):
    order: OrderDTO
    handoff_url: str | None = None  # None when no WhatsApp number is configured
