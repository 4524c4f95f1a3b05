from dataclasses import asdict

from fastapi import APIRouter, Header, HTTPException

from calculator.controller import CalculatorController
from calculator.models import (
    CalculatorStateOut,
    FieldEdit,
    LotSizeRequest,
    LotSizeResponse,
)
from calculator.registry import registry
from calculator.service import compute_position_size, lot_breakdown
from instruments.catalog import lookup

router = APIRouter(prefix="/api", tags=["Calculator"])


def _state_out(controller: CalculatorController) -> CalculatorStateOut:
    p = controller.params
    result = controller.result
    return CalculatorStateOut(
        balance=p.balance,
        risk_percent=p.risk_percent,
        risk_cash=p.risk_cash,
        sl_distance=p.sl_distance,
        instrument_symbol=p.instrument.symbol,
        result=asdict(result) if result else None,
        breakdown=lot_breakdown(result),
        sync_status=controller.sync_status.value,
        signed_in_as=controller.session.email if controller.session else None,
    )


@router.post("/lot-size", response_model=LotSizeResponse)
def lot_size_api(data: LotSizeRequest):
    inst = lookup(data.symbol)
    if inst is None:
        raise HTTPException(status_code=400, detail="Unsupported symbol")

    result = compute_position_size(data.risk_cash, data.sl_distance, inst)
    return {
        "result": asdict(result) if result else None,
        "breakdown": lot_breakdown(result),
    }


@router.get("/calculator", response_model=CalculatorStateOut)
async def calculator_state(x_client_id: str = Header("default")):
    return _state_out(registry.get(x_client_id))


# async: a signed-in edit schedules its save on the running loop
@router.post("/calculator/edit", response_model=CalculatorStateOut)
async def calculator_edit(data: FieldEdit, x_client_id: str = Header("default")):
    controller = registry.get(x_client_id)
    try:
        controller.edit(data.field, data.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state_out(controller)
