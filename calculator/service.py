import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Dict, Optional

from instruments.catalog import Instrument

# Added before flooring so a value sitting exactly on a step boundary
# is not truncated to the step below by binary float error.
QUANTIZE_EPSILON = 1e-7

_WIDE = Context(prec=400)


@dataclass(frozen=True)
class CalculationResult:
    lots: float
    is_valid: bool
    message: str
    actual_risk: float


# =========================
# PARSING / FORMATTING
# =========================

def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse user-typed text into a finite float; None when it isn't one yet."""
    if text is None:
        return None
    text = str(text).strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text with half-up rounding of the exact binary value."""
    quant = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quant, rounding=ROUND_HALF_UP, context=_WIDE))


def format_number(value: float) -> str:
    # 10.0 -> "10", 0.1 -> "0.1"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def step_decimals(step_size: float) -> int:
    """Fractional digits in a step size: 0.01 -> 2, 1 -> 0."""
    exponent = Decimal(repr(float(step_size))).normalize().as_tuple().exponent
    return max(0, -exponent)


# =========================
# SIZING
# =========================

def compute_position_size(
    risk_cash: str,
    sl_distance: str,
    instrument: Instrument,
) -> Optional[CalculationResult]:
    """
    Lots = risk cash / stop-loss distance, floored to the instrument step
    and then checked against its min/max size.

    Returns None while the inputs are not computable (unparseable text,
    zero distance, non-positive risk).
    """
    risk_amount = parse_number(risk_cash)
    distance = parse_number(sl_distance)

    if risk_amount is None or distance is None or distance == 0 or risk_amount <= 0:
        return None

    raw_units = risk_amount / distance
    if not math.isfinite(raw_units):
        return None

    step = instrument.step_size
    decimals = step_decimals(step)

    steps = raw_units / step + QUANTIZE_EPSILON
    if not math.isfinite(steps):
        return None

    # Always floor: rounding up could exceed the intended risk
    stepped_units = math.floor(steps) * step
    if not math.isfinite(stepped_units):
        return None
    lots = float(to_fixed(stepped_units, decimals))

    is_valid = True
    message = "Calculation successful"

    if lots < instrument.min_size:
        is_valid = False
        message = f"Below Min Size ({format_number(instrument.min_size)})"
    elif lots > instrument.max_size:
        is_valid = False
        message = f"Exceeds Max Size ({format_number(instrument.max_size)})"

    return CalculationResult(
        lots=lots,
        is_valid=is_valid,
        message=message,
        actual_risk=lots * distance,
    )


def lot_breakdown(result: Optional[CalculationResult]) -> Dict[str, str]:
    if result is None:
        return {"standard": "0", "mini": "0", "micro": "0"}

    mini = to_fixed(result.lots * 10, 1)
    if mini.endswith(".0"):
        mini = mini[:-2]

    return {
        "standard": format_number(result.lots),
        "mini": mini,
        "micro": to_fixed(result.lots * 100, 0),
    }
