from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SyncStatus(str, Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class SettingsSnapshot(BaseModel):
    # The store may hand numeric columns back as numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    user_id: str
    balance: str
    risk_percent: str
    risk_cash: str
    sl_distance: str
    instrument_symbol: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
