from typing import Optional

from supabase import Client, create_client

from config import settings


def create_supabase() -> Client:
    # Each signed-in client gets its own instance; auth state lives on the client
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise RuntimeError("SUPABASE_URL / SUPABASE_KEY missing")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def get_user_supabase(access_token: Optional[str]) -> Client:
    """Client whose table queries run as the user holding `access_token`."""
    client = create_supabase()
    if access_token:
        client.postgrest.auth(access_token)
    return client
