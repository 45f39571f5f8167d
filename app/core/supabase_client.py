# app/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from app.core.config import get_settings

settings = get_settings()


def supabase_auth_client() -> Client:
    """
    Create a fresh Supabase client with the anon/public key.

    Use cases:
      - email/password sign-up and sign-in on behalf of a seller

    Not cached: the auth client keeps the signed-in session in memory,
    so each sign-in gets its own client instead of sharing one
    process-wide.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache
def supabase_admin() -> Client:
    """
    Process-wide service-role client for storage writes and sign-out.

    It bypasses RLS, so it stays server-side. Raises RuntimeError when
    SUPABASE_SERVICE_ROLE_KEY is not configured.
    """
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not configured")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
