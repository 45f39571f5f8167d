# app/models/seller.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Seller(SQLModel, table=True):
    """
    Persistent seller profile.

    Identity:
      - id: MUST match Supabase auth.users.id (UUID from JWT "sub")

    The row is auto-provisioned on the first authenticated request with
    only the email filled in. The store fields are completed afterwards
    through the profile endpoints.

    This table is *not* responsible for password hashes. Supabase Auth
    stores the password in its own schema.
    """

    __tablename__ = "sellers"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Email from Supabase auth.users",
    )

    store_name: str | None = Field(
        default=None,
        max_length=100,
        description="Public name of the store",
    )

    store_location: str | None = Field(
        default=None,
        max_length=255,
        description="City / address shown to customers",
    )

    phone_number: str | None = Field(
        default=None,
        max_length=30,
        description="Contact phone number",
    )

    photo_url: str | None = Field(
        default=None,
        description="Public URL of the profile image in Supabase Storage",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last profile change (UTC)",
    )

    @property
    def is_profile_complete(self) -> bool:
        return bool(self.store_name and self.store_location and self.phone_number)
