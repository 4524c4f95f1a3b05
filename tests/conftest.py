"""
Shared fixtures: an in-memory stand-in for Supabase.

Every client created through the fake shares one backend (users, rows)
but keeps its own auth state, like separate supabase-py clients do.
"""

from types import SimpleNamespace

import pytest

import auth.service as auth_service
import preferences.service as preferences_service


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeTable:
    def __init__(self, name, rows, calls, token):
        self.name = name
        self.rows = rows
        self.calls = calls
        self.token = token
        self._filters = {}
        self._limit = None
        self._upsert = None

    def select(self, *_):
        return self

    def eq(self, column, value):
        self._filters[column] = value
        return self

    def limit(self, n):
        self._limit = n
        return self

    def upsert(self, row, on_conflict=None):
        self._upsert = row
        self.calls.append(("upsert", self.name, on_conflict, self.token))
        return self

    def execute(self):
        if self._upsert is not None:
            row = self._upsert
            self.rows[:] = [r for r in self.rows if r["user_id"] != row["user_id"]] + [row]
            return FakeResponse([row])

        self.calls.append(("select", self.name, self.token))
        data = [
            r for r in self.rows
            if all(r.get(k) == v for k, v in self._filters.items())
        ]
        if self._limit is not None:
            data = data[: self._limit]
        return FakeResponse(data)


class FakeAuth:
    """Provider side: registered users and the tokens that were signed out."""

    def __init__(self):
        self.users = {
            "trader@example.com": "secret123",
            "analyst@example.com": "secret456",
        }
        self.require_verification = False
        self.fail_sign_out = False
        self.signed_out = []

    def _response(self, email, with_session=True):
        local = email.split("@")[0]
        user = SimpleNamespace(id=f"uid-{local}", email=email)
        session = SimpleNamespace(access_token=f"token-{local}") if with_session else None
        return SimpleNamespace(user=user, session=session)

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise Exception("User already registered")
        self.users[email] = credentials["password"]
        return self._response(email, with_session=not self.require_verification)

    def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if self.users.get(email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        return self._response(email)


class FakeClientAuth:
    """One client's auth state."""

    def __init__(self, provider):
        self.provider = provider
        self.access_token = None

    def _keep(self, res):
        if res.session is not None:
            self.access_token = res.session.access_token
        return res

    def sign_up(self, credentials):
        return self._keep(self.provider.sign_up(credentials))

    def sign_in_with_password(self, credentials):
        return self._keep(self.provider.sign_in_with_password(credentials))

    def sign_out(self):
        if self.provider.fail_sign_out:
            raise Exception("network down")
        self.provider.signed_out.append(self.access_token)
        self.access_token = None


class FakePostgrest:
    def __init__(self):
        self.token = None

    def auth(self, token):
        self.token = token


class FakeClient:
    def __init__(self, backend):
        self.backend = backend
        self.auth = FakeClientAuth(backend.auth)
        self.postgrest = FakePostgrest()

    def table(self, name):
        return FakeTable(name, self.backend.rows, self.backend.calls, self.postgrest.token)


class FakeSupabase:
    def __init__(self):
        self.rows = []
        self.calls = []
        self.auth = FakeAuth()
        self.clients = []

    def new_client(self):
        client = FakeClient(self)
        self.clients.append(client)
        return client

    def user_client(self, access_token):
        client = self.new_client()
        if access_token:
            client.postgrest.auth(access_token)
        return client


@pytest.fixture
def fake_supabase(monkeypatch):
    backend = FakeSupabase()
    monkeypatch.setattr(auth_service, "create_supabase", backend.new_client)
    monkeypatch.setattr(preferences_service, "get_user_supabase", backend.user_client)
    return backend


@pytest.fixture
def fresh_sessions(monkeypatch):
    """Isolate the process-wide session and provider-client maps between tests."""
    sessions = {}
    monkeypatch.setattr(auth_service, "_SESSIONS", sessions)
    monkeypatch.setattr(auth_service, "_CLIENTS", {})
    return sessions
