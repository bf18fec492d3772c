from supabase import create_client, Client, ClientOptions

from app.core.config import settings


def get_auth_client() -> Client:
    """Fresh anon-key client for end-user sign-in.

    A password sign-in stores the user's session on the client it was made
    with, so it must never happen on the shared service-role client.
    """
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
