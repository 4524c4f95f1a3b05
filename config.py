from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.environ.get("SUPABASE_KEY", "")
    SETTINGS_TABLE: str = os.environ.get("SETTINGS_TABLE", "user_settings")
    # Inactivity window before an edit is written to the settings store
    SETTINGS_SAVE_DELAY_SECONDS: float = float(os.environ.get("SETTINGS_SAVE_DELAY_SECONDS", "1.5"))

    GEMINI_API_KEY: str | None = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
    ASSISTANT_MODEL: str = os.environ.get("ASSISTANT_MODEL", "gemini-2.5-flash")
    ASSISTANT_BASE_URL: str = os.environ.get(
        "ASSISTANT_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"
    )
    ASSISTANT_TIMEOUT_SECONDS: int = int(os.environ.get("ASSISTANT_TIMEOUT_SECONDS", "30"))

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    HOST: str = os.environ.get("HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("PORT", "8000"))


settings = Settings()
