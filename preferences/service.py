from typing import Optional

from loguru import logger

from config import settings
from db.supabase_client import get_user_supabase
from preferences.models import SettingsSnapshot


def fetch_user_settings(user_id: str, access_token: Optional[str] = None) -> Optional[SettingsSnapshot]:
    res = (
        get_user_supabase(access_token)
        .table(settings.SETTINGS_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )

    # No row yet is a normal first-session state
    if not res.data:
        return None

    return SettingsSnapshot(**res.data[0])


def upsert_user_settings(snapshot: SettingsSnapshot, access_token: Optional[str] = None) -> None:
    row = snapshot.model_dump(mode="json")
    (
        get_user_supabase(access_token)
        .table(settings.SETTINGS_TABLE)
        .upsert(row, on_conflict="user_id")
        .execute()
    )
    logger.debug(f"Settings saved for user {snapshot.user_id}")
