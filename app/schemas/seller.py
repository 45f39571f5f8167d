# app/schemas/seller.py
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


class SellerRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    email: EmailStr
    store_name: str | None
    store_location: str | None
    phone_number: str | None
    photo_url: str | None
    is_profile_complete: bool
    created_at: datetime
    updated_at: datetime


class SellerProfileComplete(SQLModel):
    """
    Payload for first-time profile completion (after sign-up).

    All store fields are required. Email is optional and only used as a
    cross-check; it must match the token email.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    store_name: str = Field(max_length=100)
    store_location: str = Field(max_length=255)
    phone_number: str = Field(max_length=30)

    @field_validator("store_name", "store_location", "phone_number")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _strip_required(v)


class SellerProfileUpdate(SQLModel):
    """
    Partial profile update (settings page).
    Omitted fields are left unchanged; provided ones cannot be blank.
    """

    model_config = ConfigDict(extra="forbid")

    store_name: str | None = Field(default=None, max_length=100)
    store_location: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=30)

    @field_validator("store_name", "store_location", "phone_number")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_required(v)


class SignUpRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=6)


class SignInRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str


class AuthTokens(SQLModel):
    """
    Tokens issued by Supabase Auth on sign-in.

    The console sends access_token as a Bearer token on every request.
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    user_id: uuid.UUID


class SignUpResult(SQLModel):
    """
    Outcome of sign-up.

    When the Supabase project requires email confirmation no session is
    issued yet, so `tokens` is None until the seller confirms and signs in.
    """

    user_id: uuid.UUID
    confirmation_required: bool
    tokens: AuthTokens | None = None
