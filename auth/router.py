from fastapi import APIRouter, Header, HTTPException

from auth.models import Credentials, SessionOut
from auth.service import AuthError, current_session, sign_in, sign_out, sign_up

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _session_out(session, message=None) -> SessionOut:
    if session is None:
        return SessionOut(signed_in=False, message=message)
    return SessionOut(signed_in=True, user_id=session.user_id, email=session.email, message=message)


@router.post("/sign-up", response_model=SessionOut)
def sign_up_api(data: Credentials, x_client_id: str = Header("default")):
    try:
        result = sign_up(data.email, data.password, x_client_id)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _session_out(result.session, result.message)


@router.post("/sign-in", response_model=SessionOut)
def sign_in_api(data: Credentials, x_client_id: str = Header("default")):
    try:
        session = sign_in(data.email, data.password, x_client_id)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return _session_out(session)


@router.post("/sign-out", response_model=SessionOut)
def sign_out_api(x_client_id: str = Header("default")):
    sign_out(x_client_id)
    return _session_out(None)


@router.get("/session", response_model=SessionOut)
def session_api(x_client_id: str = Header("default")):
    return _session_out(current_session(x_client_id))
