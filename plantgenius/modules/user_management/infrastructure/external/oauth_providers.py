# 📄 File: plantgenius/modules/user_management/infrastructure/external/oauth_providers.py
# 🧭 Purpose (Layman Explanation):
# This file manages sign-in with Google and Apple accounts, so people can start identifying
# plants without creating yet another password.
#
# 🧪 Purpose (Technical Summary):
# Federated sign-in providers implementing the SignInProvider capability interface.
# Google runs the OAuth 2.0 implicit flow through an injected browser callable and fetches
# userinfo over HTTP; Apple consumes a native credential (iOS only). Both normalize the
# provider payload and upsert the user's Profile in the backend store.
#
# 🔗 Dependencies:
# - httpx (Google userinfo endpoint)
# - plantgenius.shared.config.settings (client IDs, redirect URI, platform)
# - ProfileRepository (profile upsert)
#
# 🔄 Connected Modules / Calls From:
# - AuthService.sign_in_with (via AuthContext.sign_in_with_google / sign_in_with_apple)

"""
OAuth Providers

Supported Providers:
- Google OAuth 2.0 (implicit flow, access token in the redirect)
- Apple Sign-In (native credential, iOS only)

The platform pieces (opening a browser, showing the Apple sheet) are injected
as async callables so the flows stay testable outside a device.
"""

import secrets
from abc import abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import urlencode

import httpx

from plantgenius.modules.user_management.domain.models.profile import ProfileDraft
from plantgenius.modules.user_management.domain.models.session import AuthProvider, AuthUser
from plantgenius.modules.user_management.domain.repositories.identity_provider import (
    FederatedIdentity,
    SignInProvider,
)
from plantgenius.modules.user_management.domain.repositories.profile_repository import ProfileRepository
from plantgenius.shared.config.settings import Settings, get_settings
from plantgenius.shared.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    PlantGeniusException,
    SignInCancelledError,
)
from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)

# Opens the authorization URL and resolves with the redirect's parameters,
# or None when the user dismisses the browser.
Authorizer = Callable[[str], Awaitable[Optional[Dict[str, str]]]]

# Presents the native Apple sheet and resolves with the credential dict,
# or None when the user cancels.
AppleCredentialRequest = Callable[[], Awaitable[Optional[Dict[str, Any]]]]


class OAuthSignInProvider(SignInProvider):
    """Base class: normalize provider data, then link it to a Profile."""

    provider: AuthProvider
    refresh_existing = True

    def __init__(self, profile_repository: ProfileRepository, settings: Optional[Settings] = None):
        self.profile_repository = profile_repository
        self.settings = settings or get_settings()

    @abstractmethod
    def normalize_user_data(self, provider_data: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize provider-specific user data to the profile shape."""
        pass

    async def link_profile(self, user_data: Dict[str, Any]) -> AuthUser:
        """
        Upsert the profile for a federated identity.

        Existing profiles are refreshed with whatever the provider returned;
        new users get a profile keyed by the provider's user id.
        """
        user_id = user_data["id"]
        existing = await self.profile_repository.get_by_id(user_id)

        if existing is None:
            profile = await self.profile_repository.create(
                ProfileDraft(
                    id=user_id,
                    email=user_data["email"],
                    full_name=user_data.get("full_name"),
                    avatar_url=user_data.get("avatar_url"),
                    auth_provider=self.provider,
                )
            )
            logger.info("Created profile for federated user", user_id=user_id, provider=self.name)
            return profile.to_auth_user()

        if not self.refresh_existing:
            return existing.to_auth_user()

        updates = {
            key: value
            for key, value in user_data.items()
            if key in ("email", "full_name", "avatar_url") and value
        }
        profile = await self.profile_repository.update(user_id, updates) if updates else existing
        return profile.to_auth_user()


class GoogleSignInProvider(OAuthSignInProvider):
    """
    Google OAuth 2.0 provider implementation.

    Uses the implicit flow (response_type=token) because the client has no
    secret to exchange an authorization code with.
    """

    name = "google"
    provider = AuthProvider.GOOGLE

    auth_url = "https://accounts.google.com/o/oauth2/v2/auth"
    user_info_url = "https://www.googleapis.com/userinfo/v2/me"
    scopes = ["openid", "profile", "email"]

    def __init__(
        self,
        authorize: Authorizer,
        profile_repository: ProfileRepository,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(profile_repository, settings)
        self._authorize = authorize
        self._transport = transport

    def get_authorization_url(self, state: str) -> str:
        """
        Generate Google OAuth authorization URL.

        Raises:
            ConfigurationError: no client ID for the current platform
        """
        client_id = self.settings.google_client_id
        if not client_id:
            raise ConfigurationError(
                f"Google client ID not configured for platform '{self.settings.PLATFORM}'",
                setting=f"GOOGLE_{self.settings.PLATFORM.upper()}_CLIENT_ID",
            )

        params = {
            "client_id": client_id,
            "redirect_uri": self.settings.OAUTH_REDIRECT_URI,
            "scope": " ".join(self.scopes),
            "response_type": "token",
            "state": state,
        }
        return f"{self.auth_url}?{urlencode(params)}"

    async def get_user_info(self, access_token: str) -> Dict[str, Any]:
        """Get user information from Google using the access token."""
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=15.0) as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                response.raise_for_status()
                user_info = response.json()
        except httpx.HTTPError as e:
            logger.error("HTTP error during Google user info retrieval", error=str(e))
            raise AuthenticationError(
                "Failed to fetch user info from Google", provider=self.name
            ) from e

        logger.debug("Retrieved Google user info", email=user_info.get("email"))
        return user_info

    def normalize_user_data(self, provider_data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": provider_data.get("id"),
            "email": provider_data.get("email"),
            "full_name": provider_data.get("name"),
            "avatar_url": provider_data.get("picture"),
        }

    async def sign_in(self) -> FederatedIdentity:
        state = secrets.token_urlsafe(16)
        redirect = await self._authorize(self.get_authorization_url(state))

        if not redirect or redirect.get("error") == "access_denied":
            raise SignInCancelledError(self.name)
        if redirect.get("error"):
            raise AuthenticationError(f"Google sign in failed: {redirect['error']}", provider=self.name)
        if redirect.get("state") not in (None, state):
            raise AuthenticationError("OAuth state mismatch", provider=self.name)

        access_token = redirect.get("access_token")
        if not access_token:
            raise AuthenticationError("No access token received from Google", provider=self.name)

        user_data = self.normalize_user_data(await self.get_user_info(access_token))
        if not user_data["id"] or not user_data["email"]:
            raise AuthenticationError("Google did not return an account id and email", provider=self.name)

        try:
            user = await self.link_profile(user_data)
        except PlantGeniusException as e:
            logger.error("Google profile sync failed", user_id=user_data["id"], error=e.message)
            raise AuthenticationError(
                "Google Sign In failed. Please try email login or contact support.",
                provider=self.name,
            ) from e

        return FederatedIdentity(user=user, token=access_token)


class AppleSignInProvider(OAuthSignInProvider):
    """
    Apple Sign-In provider implementation.

    Apple only shares the email and name on the first authorization; later
    sign-ins may carry neither, so the existing profile is reused.
    """

    name = "apple"
    provider = AuthProvider.APPLE
    refresh_existing = False

    PRIVATE_RELAY_DOMAIN = "privaterelay.appleid.com"

    def __init__(
        self,
        request_credential: AppleCredentialRequest,
        profile_repository: ProfileRepository,
        settings: Optional[Settings] = None,
    ):
        super().__init__(profile_repository, settings)
        self._request_credential = request_credential

    def normalize_user_data(self, provider_data: Dict[str, Any]) -> Dict[str, Any]:
        # Apple provides minimal user data for privacy
        user_id = provider_data.get("user")
        name_info = provider_data.get("fullName") or {}
        full_name = " ".join(
            part for part in (name_info.get("givenName"), name_info.get("familyName")) if part
        )
        return {
            "id": user_id,
            "email": provider_data.get("email") or f"{user_id}@{self.PRIVATE_RELAY_DOMAIN}",
            "full_name": full_name or None,
            "avatar_url": None,
        }

    async def sign_in(self) -> FederatedIdentity:
        if self.settings.PLATFORM != "ios":
            raise AuthenticationError("Apple Sign In is only available on iOS", provider=self.name)

        credential = await self._request_credential()
        if not credential:
            raise SignInCancelledError(self.name)
        if not credential.get("user"):
            raise AuthenticationError("No user ID received from Apple", provider=self.name)

        user_data = self.normalize_user_data(credential)
        try:
            user = await self.link_profile(user_data)
        except PlantGeniusException as e:
            logger.error("Apple profile sync failed", user_id=user_data["id"], error=e.message)
            raise AuthenticationError(
                "Apple Sign In failed. Please try again.", provider=self.name
            ) from e

        return FederatedIdentity(user=user, token=credential.get("identityToken"))
