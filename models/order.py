import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import Column, Integer, Float, DateTime, String, Text, func, CheckConstraint, Enum as SQLEnum

from enums.order_status import OrderStatus
from models.base import Base


class Order(Base):
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, unique=True)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    shipping_address = Column(Text, nullable=False)

    # Items Snapshot (JSON)
    # Copied from the cart at submission time, never re-read from the catalog
    # Format: [{"product_id": 7, "name": "Almonds", "price": 1000.0, "quantity": 1, "size_label": "500g"}]
    order_items = Column(Text, nullable=False)

    shipping_fee = Column(Float, nullable=False, default=0.0)
    # Decimal string with two places, e.g. "1050.00" (sum of items + shipping_fee)
    total_amount = Column(String, nullable=False)
    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PROCESSING)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('shipping_fee >= 0', name='check_order_shipping_fee_non_negative'),
    )


class OrderItemDTO(BaseModel):
    """Fixed-shape snapshot of one cart line inside a placed order."""
    model_config = ConfigDict(frozen=True)

    product_id: int
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    size_label: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderCreateDTO(BaseModel):
    """Order draft handed to the order store. Immutable once composed."""
    model_config = ConfigDict(frozen=True)

    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    order_items: tuple[OrderItemDTO, ...] = Field(min_length=1)
    shipping_fee: float = Field(ge=0)
    total_amount: str
    status: OrderStatus = OrderStatus.PROCESSING

    def order_items_json(self) -> str:
        return json.dumps([item.model_dump() for item in self.order_items])


class OrderDTO(BaseModel):
    id: int | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    shipping_address: str | None = None
    order_items: list[OrderItemDTO] = []
    shipping_fee: float | None = 0.0
    total_amount: str | None = None
    status: OrderStatus | None = None
    created_at: datetime | None = None

    @field_validator('order_items', mode='before')
    @classmethod
    def parse_order_items(cls, value):
        # The orders table keeps the snapshot as a JSON string
        if isinstance(value, str):
            return json.loads(value)
        return value

    @property
    def subtotal(self) -> float:
        return sum(item.line_total for item in self.order_items)
