from functools import lru_cache

from supabase import create_client, Client

from app.core.config import settings


@lru_cache
def get_db() -> Client:
    """Service-role client shared by every request in the process."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
