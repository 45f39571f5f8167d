# app/routers/auth.py
from fastapi import APIRouter, Depends, status

from app.core.auth import SellerContext, require_seller
from app.schemas.seller import AuthTokens, SignInRequest, SignUpRequest, SignUpResult
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

service = AuthService()


@router.post(
    "/sign-up",
    response_model=SignUpResult,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(payload: SignUpRequest):
    """
    Register a seller account with email and password.

    The store profile is completed afterwards via PUT /sellers/me.
    """
    return service.sign_up(payload)


@router.post("/sign-in", response_model=AuthTokens)
def sign_in(payload: SignInRequest):
    """
    Exchange email and password for Supabase tokens.
    """
    return service.sign_in(payload)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(context: SellerContext = Depends(require_seller)):
    """
    Revoke the caller's session.

    Auth:
      - Requires valid Supabase JWT.
    """
    service.sign_out(context)
    return None
