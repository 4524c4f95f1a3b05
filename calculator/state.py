import math
from dataclasses import dataclass, field
from typing import Optional

from calculator.service import parse_number, to_fixed
from instruments.catalog import DEFAULT_INSTRUMENT, Instrument


@dataclass
class RiskParameters:
    """
    Editable calculator inputs, kept as raw text while the user types.

    balance is the anchor; risk_percent and risk_cash derive each other,
    whichever was edited last wins:

        set_balance       -> risk_cash     (balance, risk_percent parse)
        set_risk_percent  -> risk_cash     (balance, risk_percent parse)
        set_risk_cash     -> risk_percent  (balance, risk_cash parse, balance != 0)
        set_sl_distance   -> nothing
        set_instrument    -> nothing

    A derivation whose inputs don't parse is skipped; the peer keeps its
    previous text.
    """

    balance: str = "5000"
    risk_percent: str = "0.5"
    risk_cash: str = "25.00"
    sl_distance: str = "0.15"
    instrument: Instrument = field(default=DEFAULT_INSTRUMENT)

    # -----------------------------
    # SETTERS
    # -----------------------------
    def set_balance(self, value: str) -> None:
        self.balance = value
        self._derive_risk_cash()

    def set_risk_percent(self, value: str) -> None:
        self.risk_percent = value
        self._derive_risk_cash()

    def set_risk_cash(self, value: str) -> None:
        self.risk_cash = value
        b = parse_number(self.balance)
        c = parse_number(value)
        if b is None or c is None or b == 0:
            return
        percent = (c / b) * 100
        if not math.isfinite(percent):
            return
        self.risk_percent = to_fixed(percent, 2)

    def set_sl_distance(self, value: str) -> None:
        self.sl_distance = value

    def set_instrument(self, instrument: Instrument) -> None:
        self.instrument = instrument

    def _derive_risk_cash(self) -> None:
        b = parse_number(self.balance)
        p = parse_number(self.risk_percent)
        if b is None or p is None:
            return
        cash = b * (p / 100)
        if not math.isfinite(cash):
            return
        self.risk_cash = to_fixed(cash, 2)

    # -----------------------------
    # IMPORT
    # -----------------------------
    def load(
        self,
        balance: str,
        risk_percent: str,
        risk_cash: str,
        sl_distance: str,
        instrument: Optional[Instrument] = None,
    ) -> None:
        """Overwrite all fields verbatim, without cross-derivation."""
        self.balance = balance
        self.risk_percent = risk_percent
        self.risk_cash = risk_cash
        self.sl_distance = sl_distance
        if instrument is not None:
            self.instrument = instrument
