# app/models/product.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Catalog entry owned by one seller.

    Columns:
      - id, seller_id, name, price, quantity,
        image_url, created_at, updated_at
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    seller_id: uuid.UUID = Field(
        foreign_key="sellers.id",
        index=True,
        description="Owning seller",
    )

    name: str = Field(
        max_length=100,
        index=True,
        description="Display name of the product",
    )

    price: float = Field(
        gt=0,
        description="Unit price",
    )

    quantity: int = Field(
        default=0,
        ge=0,
        description="How many units currently in stock",
    )

    image_url: str | None = Field(
        default=None,
        description="Product image URL",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )
