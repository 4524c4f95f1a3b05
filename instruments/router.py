from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query

from instruments.catalog import INSTRUMENTS, lookup

router = APIRouter(prefix="/api/instruments", tags=["Instruments"])


@router.get("")
def list_instruments():
    return [asdict(i) for i in INSTRUMENTS]


@router.get("/lookup")
def get_instrument(symbol: str = Query(...)):
    inst = lookup(symbol)
    if inst is None:
        raise HTTPException(status_code=404, detail=f"Unknown symbol: {symbol}")
    return asdict(inst)
