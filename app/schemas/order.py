# app/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

OrderStatus = Literal["active", "completed", "cancelled"]


class OrderRead(SQLModel):
    """
    Lightweight representation of an order (without items).
    """

    id: uuid.UUID
    seller_id: uuid.UUID
    customer_name: str
    customer_email: str
    total_amount: float
    status: OrderStatus
    created_at: datetime
    updated_at: datetime


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    product_id: uuid.UUID
    name: str
    quantity: int
    price: float
    line_total: float


class OrderWithItemsRead(OrderRead):
    """
    Full order view including items.
    """

    products: list[OrderItemRead]


class OrderStatusUpdate(SQLModel):
    """
    Seller payload to change order status.
    """

    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
