from typing import Callable, Dict, Optional

from loguru import logger

from auth.service import AuthSession
from calculator.service import CalculationResult, compute_position_size
from calculator.state import RiskParameters
from config import settings
from instruments.catalog import lookup
from preferences.debounce import DebouncedSaver, SaveFn
from preferences.models import SettingsSnapshot, SyncStatus
from preferences.service import upsert_user_settings


class CalculatorController:
    """Owns one client's risk parameters, their sizing result and settings sync."""

    def __init__(
        self,
        params: Optional[RiskParameters] = None,
        save: SaveFn = upsert_user_settings,
        save_delay: Optional[float] = None,
    ):
        self.params = params or RiskParameters()
        self.session: Optional[AuthSession] = None
        self.saver = DebouncedSaver(
            save,
            settings.SETTINGS_SAVE_DELAY_SECONDS if save_delay is None else save_delay,
        )
        self.result: Optional[CalculationResult] = None
        self._recompute()

    @property
    def sync_status(self) -> SyncStatus:
        return self.saver.status

    def edit(self, field: str, value: str) -> Optional[CalculationResult]:
        setters: Dict[str, Callable[[str], None]] = {
            "balance": self.params.set_balance,
            "risk_percent": self.params.set_risk_percent,
            "risk_cash": self.params.set_risk_cash,
            "sl_distance": self.params.set_sl_distance,
            "instrument": self._set_instrument_symbol,
        }
        if field not in setters:
            raise ValueError(f"Unknown field: {field}")

        setters[field](value)
        self._recompute()

        if self.session is not None:
            self.saver.schedule(self.snapshot(), self.session.access_token)

        return self.result

    def _set_instrument_symbol(self, symbol: str) -> None:
        inst = lookup(symbol)
        if inst is None:
            raise ValueError(f"Unsupported symbol: {symbol}")
        self.params.set_instrument(inst)

    def _recompute(self) -> None:
        self.result = compute_position_size(
            self.params.risk_cash,
            self.params.sl_distance,
            self.params.instrument,
        )

    # -----------------------------
    # SESSION / SETTINGS SYNC
    # -----------------------------
    def snapshot(self) -> SettingsSnapshot:
        if self.session is None:
            raise ValueError("No session to snapshot for")
        p = self.params
        return SettingsSnapshot(
            user_id=self.session.user_id,
            balance=p.balance,
            risk_percent=p.risk_percent,
            risk_cash=p.risk_cash,
            sl_distance=p.sl_distance,
            instrument_symbol=p.instrument.symbol,
        )

    def attach_session(self, session: AuthSession, stored: Optional[SettingsSnapshot] = None) -> None:
        self.session = session

        if stored is not None:
            inst = lookup(stored.instrument_symbol)
            if inst is None:
                logger.warning(
                    f"Stored instrument {stored.instrument_symbol} not in catalog, keeping "
                    f"{self.params.instrument.symbol}"
                )
            self.params.load(
                stored.balance,
                stored.risk_percent,
                stored.risk_cash,
                stored.sl_distance,
                inst,
            )
            self._recompute()
            logger.info(f"Imported saved settings for {session.email}")

    def detach_session(self) -> None:
        self.saver.cancel()
        self.saver.status = SyncStatus.IDLE
        self.session = None
