# app/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from app.core.config import get_settings

settings = get_settings()


@lru_cache
def supabase_admin() -> Client:
    """
    Service-role Supabase client, built once per process.

    Only the Storage helpers use it (entry images live in
    STORAGE_BUCKET). The key bypasses row level security and must stay
    on the server.

    Raises:
        RuntimeError: when SUPABASE_SERVICE_ROLE_KEY is empty.
    """
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not configured")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
