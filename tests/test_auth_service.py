"""AuthService: validation, provider errors, profile creation and session persistence."""

import json
from datetime import timedelta

from conftest import EMAIL, NOW, PASSWORD, USER_ID, FakeSignInProvider, make_session, make_user
from plantgenius.modules.user_management.domain.repositories import FederatedIdentity, IdentityResponse
from plantgenius.modules.user_management.domain.services.auth_service import AUTH_TOKEN_KEY, AUTH_USER_KEY
from plantgenius.shared.core.exceptions import APIError, AuthenticationError, SignInCancelledError


async def test_sign_up_creates_profile_and_persists_session(auth_service, identity_provider, profiles, storage):
    session = make_session()
    identity_provider.sign_up_response = IdentityResponse(user=session.user, session=session)

    result = await auth_service.sign_up_with_email(EMAIL, PASSWORD, "Ada Fern")

    assert result.ok
    assert result.data.user.id == USER_ID
    assert identity_provider.calls[0] == ("sign_up", EMAIL, {"full_name": "Ada Fern"})
    assert profiles.profiles[USER_ID].full_name == "Ada Fern"
    assert json.loads(storage.snapshot()[AUTH_TOKEN_KEY])["token"] == "access-token"
    assert auth_service.get_session() == session


async def test_sign_up_provider_error_returns_error_and_writes_no_profile(auth_service, identity_provider, profiles):
    identity_provider.sign_up_response = IdentityResponse(error="User already registered")

    result = await auth_service.sign_up_with_email(EMAIL, PASSWORD, "Ada Fern")

    assert result.data is None
    assert result.error.message == "User already registered"
    assert result.error.code == "EMAIL_SIGN_UP_FAILED"
    assert profiles.writes == []


async def test_sign_up_rejects_weak_password_before_network(auth_service, identity_provider):
    result = await auth_service.sign_up_with_email(EMAIL, "short", "Ada Fern")

    assert result.error.code == "VALIDATION_ERROR"
    assert identity_provider.calls == []


async def test_sign_up_rejects_invalid_email_before_network(auth_service, identity_provider):
    result = await auth_service.sign_up_with_email("not-an-email", PASSWORD, "Ada Fern")

    assert result.error.code == "VALIDATION_ERROR"
    assert identity_provider.calls == []


async def test_profile_creation_failure_does_not_fail_sign_up(auth_service, identity_provider, profiles):
    session = make_session()
    identity_provider.sign_up_response = IdentityResponse(user=session.user, session=session)
    profiles.fail_with = APIError("Database unavailable", status_code=503)

    result = await auth_service.sign_up_with_email(EMAIL, PASSWORD, "Ada Fern")

    assert result.ok
    assert auth_service.get_session() is not None


async def test_sign_up_awaiting_email_confirmation_returns_no_session(auth_service, identity_provider, profiles, storage):
    identity_provider.sign_up_response = IdentityResponse(user=make_user())

    result = await auth_service.sign_up_with_email(EMAIL, PASSWORD, "Ada Fern")

    assert result.ok and result.data is None
    assert USER_ID in profiles.profiles
    assert storage.snapshot() == {}


async def test_sign_in_with_wrong_password(auth_service, identity_provider):
    identity_provider.sign_in_response = IdentityResponse(error="Invalid login credentials")

    result = await auth_service.sign_in_with_email(EMAIL, "Wrong1234")

    assert result.error.code == "EMAIL_SIGN_IN_FAILED"
    assert result.error.message == "Invalid login credentials"
    assert auth_service.get_session() is None


async def test_sign_in_persists_session(auth_service, identity_provider, storage):
    identity_provider.sign_in_response = IdentityResponse(session=make_session())

    result = await auth_service.sign_in_with_email(EMAIL, PASSWORD)

    assert result.ok
    assert set(storage.snapshot()) == {AUTH_TOKEN_KEY, AUTH_USER_KEY}


async def test_initialize_restores_valid_session(auth_service, storage):
    await auth_service.persist_session(make_session())
    auth_service._session = None

    restored = await auth_service.initialize()

    assert restored.user.email == EMAIL
    assert restored.expires_at == NOW + timedelta(days=30)


async def test_initialize_with_expired_session_clears_storage(auth_service, storage):
    await auth_service.persist_session(make_session(expires_at=NOW - timedelta(minutes=1)))

    assert await auth_service.initialize() is None
    assert storage.snapshot() == {}
    assert auth_service.get_session() is None


async def test_initialize_with_corrupt_storage_clears_it(auth_service, storage):
    await storage.set_item(AUTH_TOKEN_KEY, "{not json")
    await storage.set_item(AUTH_USER_KEY, "{}")

    assert await auth_service.initialize() is None
    assert storage.snapshot() == {}


async def test_sign_out_clears_storage_even_when_provider_fails(auth_service, identity_provider, storage):
    await auth_service.persist_session(make_session())
    identity_provider.sign_out_exception = ConnectionError("offline")

    result = await auth_service.sign_out()

    assert result.error.code == "SIGN_OUT_FAILED"
    assert storage.snapshot() == {}
    assert auth_service.get_session() is None


async def test_federated_sign_in_issues_thirty_day_session(auth_service):
    identity = FederatedIdentity(user=make_user(auth_provider="google"), token="google-token")

    result = await auth_service.sign_in_with(FakeSignInProvider("google", identity))

    assert result.ok
    assert result.data.token == "google-token"
    assert result.data.expires_at == NOW + timedelta(days=30)


async def test_federated_cancellation_maps_to_cancelled(auth_service):
    result = await auth_service.sign_in_with(FakeSignInProvider("apple", error=SignInCancelledError("apple")))

    assert result.error.code == "CANCELLED"


async def test_federated_failure_uses_provider_error_code(auth_service):
    provider = FakeSignInProvider("google", error=AuthenticationError("Failed to fetch user info from Google"))

    result = await auth_service.sign_in_with(provider)

    assert result.error.code == "GOOGLE_SIGN_IN_FAILED"
    assert result.error.message == "Failed to fetch user info from Google"


async def test_reset_password(auth_service, identity_provider):
    assert (await auth_service.reset_password(EMAIL)).ok

    identity_provider.reset_error = "Rate limit exceeded"
    result = await auth_service.reset_password(EMAIL)

    assert result.error.code == "PASSWORD_RESET_FAILED"
    assert identity_provider.calls[-1] == ("reset_password_for_email", EMAIL)
