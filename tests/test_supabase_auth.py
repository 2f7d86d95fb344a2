"""SupabaseIdentityProvider mapping, with a stand-in for the supabase auth client."""

from datetime import datetime, timezone
from types import SimpleNamespace

from plantgenius.modules.user_management.infrastructure.external.supabase_auth import (
    SupabaseIdentityProvider,
    to_auth_session,
)

EXPIRES = int(datetime(2026, 11, 18, tzinfo=timezone.utc).timestamp())


def supabase_user(provider="email"):
    return SimpleNamespace(
        id="u1",
        email="grower@plantgenius.app",
        user_metadata={"full_name": "Ada Fern"},
        app_metadata={"provider": provider},
    )


def supabase_session(expires_at=EXPIRES):
    return SimpleNamespace(access_token="jwt", expires_at=expires_at, user=supabase_user())


class FakeAuthClient:
    def __init__(self):
        self.calls = []
        self.callbacks = []

    async def sign_up(self, credentials):
        self.calls.append(("sign_up", credentials))
        return SimpleNamespace(user=supabase_user(), session=None)

    async def sign_in_with_password(self, credentials):
        self.calls.append(("sign_in_with_password", credentials))
        return SimpleNamespace(user=supabase_user(), session=supabase_session())

    async def sign_out(self):
        self.calls.append(("sign_out",))

    async def get_session(self):
        return supabase_session()

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        return SimpleNamespace(unsubscribe=lambda: self.callbacks.remove(callback))

    async def reset_password_for_email(self, email, options):
        self.calls.append(("reset_password_for_email", email))


class FakeManager:
    def __init__(self, auth):
        self.auth = auth

    async def get_auth_client(self):
        return self.auth


def test_session_mapping_uses_reported_expiry():
    session = to_auth_session(supabase_session())

    assert session.token == "jwt"
    assert session.user.full_name == "Ada Fern"
    assert session.expires_at == datetime(2026, 11, 18, tzinfo=timezone.utc)


def test_session_mapping_unknown_provider_defaults_to_email():
    raw = supabase_session()
    raw.user = supabase_user(provider="github")

    assert to_auth_session(raw).user.auth_provider == "email"


def test_missing_session_maps_to_none():
    assert to_auth_session(None) is None


async def test_sign_up_passes_metadata():
    auth = FakeAuthClient()
    provider = SupabaseIdentityProvider(auth_client=auth)

    response = await provider.sign_up("grower@plantgenius.app", "Monstera123", {"full_name": "Ada Fern"})

    assert response.user.id == "u1"
    assert response.session is None
    assert auth.calls[0][1]["options"] == {"data": {"full_name": "Ada Fern"}}


async def test_sign_in_returns_session():
    provider = SupabaseIdentityProvider(auth_client=FakeAuthClient())

    response = await provider.sign_in_with_password("grower@plantgenius.app", "Monstera123")

    assert response.error is None
    assert response.session.token == "jwt"


async def test_listener_registered_before_client_is_attached_lazily():
    auth = FakeAuthClient()
    provider = SupabaseIdentityProvider(manager=FakeManager(auth))
    received = []

    unsubscribe = provider.on_auth_state_change(received.append)
    assert auth.callbacks == []

    await provider.get_session()
    auth.callbacks[0]("SIGNED_IN", supabase_session())
    unsubscribe()

    assert received[0].user.id == "u1"
    assert auth.callbacks == []
