# 📄 File: plantgenius/modules/user_management/domain/repositories/identity_provider.py
# 🧭 Purpose (Layman Explanation):
# Describes what we need from the sign-in service (create accounts, check passwords,
# sign out, send reset emails, tell us when the signed-in user changes).
# 🧪 Purpose (Technical Summary):
# Identity provider contract plus the sign-in capability interface implemented once per
# federated provider (Google, Apple). Responses are already mapped to domain models.
# 🔗 Dependencies:
# abc, pydantic, session/profile models
# 🔄 Connected Modules / Calls From:
# AuthService, SupabaseIdentityProvider, GoogleSignInProvider, AppleSignInProvider

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from plantgenius.modules.user_management.domain.models.session import AuthSession, AuthUser

AuthStateListener = Callable[[Optional[AuthSession]], None]
Unsubscribe = Callable[[], None]


class IdentityResponse(BaseModel):
    """{user, session, error} as returned by the identity provider."""

    user: Optional[AuthUser] = None
    session: Optional[AuthSession] = None
    error: Optional[str] = None


class IdentityProvider(ABC):
    """Credential authentication and session issuance."""

    @abstractmethod
    async def sign_up(
        self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None
    ) -> IdentityResponse:
        pass

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> IdentityResponse:
        pass

    @abstractmethod
    async def sign_out(self) -> Optional[str]:
        """Returns an error message, or None on success."""
        pass

    @abstractmethod
    async def get_session(self) -> Optional[AuthSession]:
        pass

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateListener) -> Unsubscribe:
        """Invoke callback with the new session (or None) on every auth transition."""
        pass

    @abstractmethod
    async def reset_password_for_email(self, email: str) -> Optional[str]:
        """Returns an error message, or None on success."""
        pass


class FederatedIdentity(BaseModel):
    """Result of a completed federated sign-in."""

    user: AuthUser
    token: Optional[str] = None


class SignInProvider(ABC):
    """Capability interface: one implementation per federated provider."""

    name: str = "federated"

    @abstractmethod
    async def sign_in(self) -> FederatedIdentity:
        """
        Run the provider flow and return the signed-in identity.

        Raises:
            SignInCancelledError: the user dismissed the flow
            AuthenticationError: the provider flow failed
        """
        pass
