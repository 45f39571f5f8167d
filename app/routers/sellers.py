# app/routers/sellers.py
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlmodel import Session

from app.core.auth import SellerContext, require_seller
from app.database import get_session
from app.repositories.seller_repo import SellerRepository
from app.schemas.seller import SellerProfileComplete, SellerProfileUpdate, SellerRead
from app.services.seller_service import SellerService

router = APIRouter(prefix="/sellers", tags=["Sellers"])

repo = SellerRepository()
service = SellerService(repo)


@router.get("/me", response_model=SellerRead)
def read_me(context: SellerContext = Depends(require_seller)):
    """
    Return the authenticated seller's profile.

    `is_profile_complete` tells the console whether to show the
    profile completion form.
    """
    return service.get_me(context)


@router.put("/me", response_model=SellerRead)
def complete_profile(
    payload: SellerProfileComplete,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_seller),
):
    """
    First-time profile completion.

    Store name, location and phone number are required.
    """
    return service.complete_profile(session, context, payload)


@router.patch("/me", response_model=SellerRead)
def update_me(
    payload: SellerProfileUpdate,
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_seller),
):
    """
    Update the authenticated seller's profile (partial update).
    """
    return service.update_profile(session, context, payload)


@router.post(
    "/me/photo",
    response_model=SellerRead,
    summary="Upload or replace the profile image",
)
def upload_photo(
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_seller),
):
    """
    Upload a new profile image.

    - Accepts JPEG, PNG, WEBP (max 5MB).
    - Replaces any previous image.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return service.set_photo(
        session=session,
        context=context,
        content_type=file.content_type,
        file_bytes=file_bytes,
    )
