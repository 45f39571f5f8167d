# app/core/auth.py
import logging
import uuid
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.seller import Seller
from app.repositories.seller_repo import SellerRepository

settings = get_settings()
logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so require_seller can answer with a consistent 401.
bearer_scheme = HTTPBearer(auto_error=False)

seller_repo = SellerRepository()


@dataclass(frozen=True)
class SellerContext:
    """
    Identity of the seller making the current request.

    Built per request from the bearer token and passed explicitly to
    handlers and services. It lives from sign-in (token issued) to
    sign-out (token revoked); nothing about it is kept process-wide.
    """

    seller: Seller
    access_token: str

    @property
    def seller_id(self) -> uuid.UUID:
        return self.seller.id

    @property
    def email(self) -> str:
        return self.seller.email


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_seller_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> SellerContext | None:
    """
    Resolve the calling seller from a Supabase JWT.

    Flow:
      1. If no Authorization header => anonymous => return None.
      2. Decode JWT => extract 'sub' (auth user id) and 'email'.
      3. Convert 'sub' to UUID to match Seller.id type.
      4. Find the seller profile; auto-provision it if missing.

    Raises:
        HTTPException(401): if token is malformed or missing required claims.
    """
    if credentials is None:
        return None

    token = credentials.credentials
    payload = decode_access_token(token)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )

    try:
        seller_id = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    seller = seller_repo.get_by_id(session, seller_id)
    if seller is None:
        seller = seller_repo.create(session, Seller(id=seller_id, email=email))
        logger.info("Provisioned seller profile %s", seller_id)

    return SellerContext(seller=seller, access_token=token)


def require_seller(
    context: SellerContext | None = Depends(get_seller_context),
) -> SellerContext:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if there is no valid token.
    """
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return context


def require_complete_profile(
    context: SellerContext = Depends(require_seller),
) -> SellerContext:
    """
    Enforce a completed store profile.

    Catalog, order and analytics routes stay closed until the seller has
    filled in store name, location and phone.

    Raises:
        HTTPException(403): if the profile is incomplete.
    """
    if not context.seller.is_profile_complete:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Seller profile is incomplete",
        )
    return context
