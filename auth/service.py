from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from loguru import logger
from supabase import Client

from db.supabase_client import create_supabase

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

VERIFY_EMAIL_MESSAGE = (
    "Account created! Please check your email to verify your account before logging in."
)


@dataclass(frozen=True)
class AuthSession:
    user_id: str
    email: str
    access_token: Optional[str] = None


@dataclass(frozen=True)
class SignUpResult:
    session: Optional[AuthSession]
    message: Optional[str] = None


class AuthError(Exception):
    pass


def friendly_auth_message(message: Optional[str]) -> str:
    message = message or "An unexpected error occurred"
    if "Invalid login credentials" in message:
        return "Incorrect email or password."
    if "User already registered" in message:
        return "This email is already registered. Try signing in."
    return message


# =========================
# SESSION EVENTS
# =========================

AuthListener = Callable[[str, str, Optional[AuthSession]], None]


class AuthEvents:
    def __init__(self):
        self.listeners: List[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> None:
        self.listeners.append(listener)

    def emit(self, event: str, client_id: str, session: Optional[AuthSession]) -> None:
        for listener in self.listeners[:]:
            listener(event, client_id, session)


auth_events = AuthEvents()

# client id -> signed-in session; process-lifetime only
_SESSIONS: Dict[str, AuthSession] = {}

# client id -> provider client holding that session's auth state
_CLIENTS: Dict[str, Client] = {}


def _to_session(res) -> Optional[AuthSession]:
    if res.user is None or res.session is None:
        return None
    return AuthSession(
        user_id=str(res.user.id),
        email=res.user.email or "",
        access_token=res.session.access_token,
    )


def _start_session(client_id: str, session: AuthSession, provider: Client) -> AuthSession:
    _SESSIONS[client_id] = session
    _CLIENTS[client_id] = provider
    logger.info(f"Signed in {session.email} on client {client_id}")
    auth_events.emit(SIGNED_IN, client_id, session)
    return session


# =========================
# OPERATIONS
# =========================

def sign_up(email: str, password: str, client_id: str) -> SignUpResult:
    try:
        provider = create_supabase()
        res = provider.auth.sign_up({"email": email, "password": password})
    except Exception as e:
        logger.warning(f"Sign-up failed for {email}: {e}")
        raise AuthError(friendly_auth_message(str(e))) from e

    session = _to_session(res)

    # User created but no session: email verification pending
    if session is None:
        return SignUpResult(session=None, message=VERIFY_EMAIL_MESSAGE)

    return SignUpResult(session=_start_session(client_id, session, provider))


def sign_in(email: str, password: str, client_id: str) -> AuthSession:
    try:
        provider = create_supabase()
        res = provider.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.warning(f"Sign-in failed for {email}: {e}")
        raise AuthError(friendly_auth_message(str(e))) from e

    session = _to_session(res)
    if session is None:
        raise AuthError(friendly_auth_message(None))

    return _start_session(client_id, session, provider)


def sign_out(client_id: str) -> None:
    session = _SESSIONS.pop(client_id, None)
    provider = _CLIENTS.pop(client_id, None)
    if session is None:
        return

    if provider is not None:
        try:
            provider.auth.sign_out()
        except Exception as e:
            # Local session is dropped regardless
            logger.warning(f"Provider sign-out failed for {session.email}: {e}")

    logger.info(f"Signed out {session.email} on client {client_id}")
    auth_events.emit(SIGNED_OUT, client_id, None)


def current_session(client_id: str) -> Optional[AuthSession]:
    return _SESSIONS.get(client_id)
