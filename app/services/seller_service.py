# app/services/seller_service.py
import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.auth import SellerContext
from app.core.storage_utils import (
    delete_public_url,
    image_extension,
    upload_to_storage,
)
from app.models.seller import Seller
from app.repositories.seller_repo import SellerRepository
from app.schemas.seller import SellerProfileComplete, SellerProfileUpdate

logger = logging.getLogger(__name__)


class SellerService:
    """
    Business logic for the seller's own profile.

    Responsibilities:
      - profile completion after sign-up (all store fields required)
      - partial edits from the settings page
      - profile image upload to Supabase Storage
    """

    def __init__(self, repo: SellerRepository):
        self.repo = repo

    def get_me(self, context: SellerContext) -> Seller:
        return context.seller

    def complete_profile(
        self,
        session: Session,
        context: SellerContext,
        payload: SellerProfileComplete,
    ) -> Seller:
        """
        First-time profile completion.

        Rules:
          - email cannot be changed via this endpoint
          - store name, location and phone are all required
        """
        seller = context.seller
        if payload.email and payload.email != seller.email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email cannot be changed",
            )

        seller.store_name = payload.store_name
        seller.store_location = payload.store_location
        seller.phone_number = payload.phone_number
        seller.updated_at = datetime.now(timezone.utc)

        logger.info("Seller %s completed their profile", seller.id)
        return self.repo.update(session, seller)

    def update_profile(
        self,
        session: Session,
        context: SellerContext,
        payload: SellerProfileUpdate,
    ) -> Seller:
        """
        Partial update for profile edits.
        """
        seller = context.seller
        changes = payload.model_dump(exclude_none=True)
        for field, value in changes.items():
            setattr(seller, field, value)

        if changes:
            seller.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, seller)

    def set_photo(
        self,
        session: Session,
        context: SellerContext,
        content_type: str,
        file_bytes: bytes,
    ) -> Seller:
        """
        Upload or replace the profile image.

        Path pattern:
            sellers/<seller_id>/profile.<ext>
        """
        try:
            ext = image_extension(content_type, file_bytes)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                detail=str(exc),
            )
        if ext is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
            )

        seller = context.seller
        old_url = seller.photo_url

        seller.photo_url = upload_to_storage(
            f"sellers/{seller.id}/profile.{ext}",
            file_bytes,
            content_type,
        )
        seller.updated_at = datetime.now(timezone.utc)
        seller = self.repo.update(session, seller)

        # Same extension: the upload already overwrote the object in place
        if old_url and old_url != seller.photo_url:
            delete_public_url(old_url)
        return seller
