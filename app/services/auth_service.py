# app/services/auth_service.py
import logging
import uuid

from fastapi import HTTPException, status
from supabase import AuthError

from app.core.auth import SellerContext
from app.core.supabase_client import supabase_admin, supabase_auth_client
from app.schemas.seller import AuthTokens, SignInRequest, SignUpRequest, SignUpResult

logger = logging.getLogger(__name__)


class AuthService:
    """
    Email/password session lifecycle, delegated to Supabase Auth.

    Responsibilities:
      - sign-up / sign-in: obtain tokens for the console
      - sign-out: revoke the caller's session server-side

    The seller profile row itself is provisioned lazily on the first
    authenticated request (see app.core.auth.get_seller_context).
    """

    @staticmethod
    def _tokens_from(session, user_id: uuid.UUID) -> AuthTokens:
        return AuthTokens(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            user_id=user_id,
        )

    def sign_up(self, payload: SignUpRequest) -> SignUpResult:
        client = supabase_auth_client()
        try:
            response = client.auth.sign_up(
                {"email": payload.email, "password": payload.password}
            )
        except AuthError as exc:
            logger.info("Sign-up rejected for %s: %s", payload.email, exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            )

        user_id = uuid.UUID(str(response.user.id))
        if response.session is None:
            # Email confirmation pending
            return SignUpResult(user_id=user_id, confirmation_required=True)

        return SignUpResult(
            user_id=user_id,
            confirmation_required=False,
            tokens=self._tokens_from(response.session, user_id),
        )

    def sign_in(self, payload: SignInRequest) -> AuthTokens:
        client = supabase_auth_client()
        try:
            response = client.auth.sign_in_with_password(
                {"email": payload.email, "password": payload.password}
            )
        except AuthError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        if response.session is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Email address not confirmed",
            )

        logger.info("Seller %s signed in", payload.email)
        return self._tokens_from(response.session, uuid.UUID(str(response.user.id)))

    def sign_out(self, context: SellerContext) -> None:
        """
        Revoke every session of the calling seller.

        After this the refresh token is dead; the access token stays
        verifiable locally until it expires.
        """
        try:
            supabase_admin().auth.admin.sign_out(context.access_token)
        except AuthError as exc:
            logger.warning("Sign-out failed for %s: %s", context.seller_id, exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Sign-out failed",
            )
        logger.info("Seller %s signed out", context.seller_id)
