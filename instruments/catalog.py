from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class Instrument:
    symbol: str
    name: str
    asset_type: str
    currency: str
    precision: int        # price decimals
    margin_rate: str
    lot_size: float       # contract size per 1.0 lot
    min_size: float
    max_size: float
    step_size: float

    def __post_init__(self):
        if self.step_size <= 0:
            raise ValueError(f"{self.symbol}: step size must be > 0")
        if self.min_size > self.max_size:
            raise ValueError(f"{self.symbol}: min size exceeds max size")


def build_catalog(instruments: Iterable[Instrument]) -> Dict[str, Instrument]:
    """Index instruments by symbol, rejecting duplicates."""
    catalog: Dict[str, Instrument] = {}
    for inst in instruments:
        if inst.symbol in catalog:
            raise ValueError(f"Duplicate symbol in catalog: {inst.symbol}")
        catalog[inst.symbol] = inst
    return catalog


INSTRUMENTS: List[Instrument] = [
    Instrument("BTC/USD", "Bitcoin", "Crypto", "USD", 2, "50%", 1.0, 0.001, 10.0, 0.001),
    Instrument("ETH/USD", "Ethereum", "Crypto", "USD", 2, "50%", 1.0, 0.01, 100.0, 0.01),
    Instrument("AVAX/USD", "Avalanche", "Crypto", "USD", 3, "50%", 1.0, 0.1, 1000.0, 0.1),
    Instrument("SOL/USD", "Solana", "Crypto", "USD", 3, "50%", 1.0, 0.01, 2000.0, 0.01),
    Instrument("AAVE/USD", "Aave", "Crypto", "USD", 2, "50%", 1.0, 0.01, 500.0, 0.01),
    Instrument("LINK/USD", "Chainlink", "Crypto", "USD", 3, "50%", 1.0, 0.1, 5000.0, 0.1),
    Instrument("ADA/USD", "Cardano", "Crypto", "USD", 4, "50%", 1.0, 10.0, 100000.0, 1.0),
]

CATALOG: Dict[str, Instrument] = build_catalog(INSTRUMENTS)

DEFAULT_INSTRUMENT: Instrument = INSTRUMENTS[2]  # AVAX/USD


def lookup(symbol: str) -> Optional[Instrument]:
    return CATALOG.get(symbol)
