from typing import Literal, Optional

from pydantic import BaseModel


class LotSizeRequest(BaseModel):
    symbol: str
    risk_cash: str
    sl_distance: str


class CalculationResultOut(BaseModel):
    lots: float
    is_valid: bool
    message: str
    actual_risk: float


class LotBreakdown(BaseModel):
    standard: str
    mini: str
    micro: str


class LotSizeResponse(BaseModel):
    result: Optional[CalculationResultOut] = None
    breakdown: LotBreakdown


class FieldEdit(BaseModel):
    field: Literal["balance", "risk_percent", "risk_cash", "sl_distance", "instrument"]
    value: str


class CalculatorStateOut(BaseModel):
    balance: str
    risk_percent: str
    risk_cash: str
    sl_distance: str
    instrument_symbol: str
    result: Optional[CalculationResultOut] = None
    breakdown: LotBreakdown
    sync_status: str
    signed_in_as: Optional[str] = None
