# app/models/order.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order placed against a seller's storefront.

    Orders are created by the storefront, not by this console. The console
    reads them, filters them and moves them out of "active".

    Columns:
      - id, seller_id, customer_name, customer_email,
        total_amount, status, created_at, updated_at
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    seller_id: uuid.UUID = Field(
        foreign_key="sellers.id",
        index=True,
    )

    customer_name: str = Field(
        description="Name of the ordering customer",
    )
    customer_email: str = Field(
        description="Contact email of the ordering customer",
    )

    # Sum of quantity * price over the line items
    total_amount: float = Field(
        ge=0,
        description="Final amount for this order",
    )

    # active | completed | cancelled
    status: str = Field(
        default="active",
        index=True,
        description="Order status lifecycle",
    )

    # Immutable; the only timestamp used for analytics bucketing
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        description="Last status change (UTC)",
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.

    Columns:
      - id, order_id, product_id, name, quantity, price, position
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    # Not a foreign key: the product may have been deleted since
    product_id: uuid.UUID = Field(
        index=True,
    )

    name: str = Field(
        description="Product name at time of order",
    )

    quantity: int = Field(
        ge=0,
        description="Quantity ordered",
    )

    price: float = Field(
        ge=0,
        description="Unit price at time of order",
    )

    position: int = Field(
        default=0,
        ge=0,
        description="Ordering index within the order",
    )
