"""Google and Apple sign-in providers with injected platform callables."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from plantgenius.modules.user_management.domain.models import Profile
from plantgenius.modules.user_management.infrastructure.external.oauth_providers import (
    AppleSignInProvider,
    GoogleSignInProvider,
)
from plantgenius.shared.config.settings import Settings
from plantgenius.shared.core.exceptions import AuthenticationError, ConfigurationError, SignInCancelledError

GOOGLE_USER = {
    "id": "g-42",
    "email": "grower@plantgenius.app",
    "name": "Ada Fern",
    "picture": "https://lh3.googleusercontent.com/a/photo.png",
}


def google_settings(**overrides):
    values = {"PLATFORM": "ios", "GOOGLE_IOS_CLIENT_ID": "ios-client.apps.googleusercontent.com"}
    values.update(overrides)
    return Settings(**values)


def userinfo_transport(status=200, body=GOOGLE_USER):
    def handler(request):
        assert request.headers["Authorization"] == "Bearer ya29.token"
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


def browser_returning(params):
    async def authorize(url):
        state = parse_qs(urlparse(url).query)["state"][0]
        return {**params, "state": state} if params is not None else None

    return authorize


async def test_google_creates_profile_for_new_user(profiles):
    provider = GoogleSignInProvider(
        browser_returning({"access_token": "ya29.token"}),
        profiles,
        google_settings(),
        transport=userinfo_transport(),
    )

    identity = await provider.sign_in()

    assert identity.token == "ya29.token"
    assert identity.user.id == "g-42"
    assert identity.user.auth_provider == "google"
    assert profiles.profiles["g-42"].avatar_url == GOOGLE_USER["picture"]


async def test_google_refreshes_existing_profile(profiles):
    profiles.profiles["g-42"] = Profile(id="g-42", email="old@plantgenius.app", auth_provider="google")
    provider = GoogleSignInProvider(
        browser_returning({"access_token": "ya29.token"}),
        profiles,
        google_settings(),
        transport=userinfo_transport(),
    )

    identity = await provider.sign_in()

    assert identity.user.email == "grower@plantgenius.app"
    assert profiles.profiles["g-42"].full_name == "Ada Fern"


def test_google_authorization_url_uses_platform_client_id(profiles):
    provider = GoogleSignInProvider(browser_returning(None), profiles, google_settings())

    query = parse_qs(urlparse(provider.get_authorization_url("xyz")).query)

    assert query["client_id"] == ["ios-client.apps.googleusercontent.com"]
    assert query["response_type"] == ["token"]
    assert query["state"] == ["xyz"]


def test_google_without_client_id_is_a_configuration_error(profiles):
    provider = GoogleSignInProvider(browser_returning(None), profiles, google_settings(PLATFORM="android"))

    with pytest.raises(ConfigurationError):
        provider.get_authorization_url("xyz")


async def test_google_dismissed_browser_is_cancellation(profiles):
    provider = GoogleSignInProvider(browser_returning(None), profiles, google_settings())

    with pytest.raises(SignInCancelledError):
        await provider.sign_in()


async def test_google_userinfo_failure(profiles):
    provider = GoogleSignInProvider(
        browser_returning({"access_token": "ya29.token"}),
        profiles,
        google_settings(),
        transport=userinfo_transport(status=401, body={"error": "invalid_token"}),
    )

    with pytest.raises(AuthenticationError, match="Failed to fetch user info"):
        await provider.sign_in()
    assert profiles.writes == []


async def test_google_state_mismatch(profiles):
    async def authorize(url):
        return {"access_token": "ya29.token", "state": "forged"}

    provider = GoogleSignInProvider(authorize, profiles, google_settings(), transport=userinfo_transport())

    with pytest.raises(AuthenticationError, match="state"):
        await provider.sign_in()


def apple_credential(**overrides):
    credential = {
        "user": "001234.apple",
        "email": None,
        "fullName": {"givenName": "Ada", "familyName": "Fern"},
        "identityToken": "apple.jwt",
    }
    credential.update(overrides)

    async def request():
        return credential

    return request


async def test_apple_uses_private_relay_email_when_hidden(profiles):
    provider = AppleSignInProvider(apple_credential(), profiles, Settings(PLATFORM="ios"))

    identity = await provider.sign_in()

    assert identity.user.email == "001234.apple@privaterelay.appleid.com"
    assert identity.user.full_name == "Ada Fern"
    assert identity.token == "apple.jwt"


async def test_apple_reuses_existing_profile(profiles):
    profiles.profiles["001234.apple"] = Profile(id="001234.apple", email="grower@plantgenius.app", auth_provider="apple")
    provider = AppleSignInProvider(apple_credential(fullName=None), profiles, Settings(PLATFORM="ios"))

    identity = await provider.sign_in()

    assert identity.user.email == "grower@plantgenius.app"
    assert profiles.writes == []


async def test_apple_is_ios_only(profiles):
    provider = AppleSignInProvider(apple_credential(), profiles, Settings(PLATFORM="android"))

    with pytest.raises(AuthenticationError, match="only available on iOS"):
        await provider.sign_in()


async def test_apple_cancel(profiles):
    async def cancelled():
        return None

    provider = AppleSignInProvider(cancelled, profiles, Settings(PLATFORM="ios"))

    with pytest.raises(SignInCancelledError):
        await provider.sign_in()
