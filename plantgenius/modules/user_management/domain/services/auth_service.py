# 📄 File: plantgenius/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Handles signing up, signing in (email, Google, Apple), signing out and password resets,
# and remembers the signed-in user on the device between launches.
# 🧪 Purpose (Technical Summary):
# Provider-agnostic authentication service: wraps the identity provider and federated
# sign-in providers, persists/restores the client session in local key-value storage, and
# converts every failure into an AuthResult error variant instead of raising.
# 🔗 Dependencies:
# Domain models, identity provider / repository interfaces, local storage, validators
# 🔄 Connected Modules / Calls From:
# AuthContext (application layer)

import json
import secrets
from datetime import datetime, timezone
from typing import Callable, Optional

from plantgenius.modules.user_management.domain.models.profile import ProfileDraft
from plantgenius.modules.user_management.domain.models.results import AuthResult
from plantgenius.modules.user_management.domain.models.session import (
    AuthProvider,
    AuthSession,
    AuthUser,
)
from plantgenius.modules.user_management.domain.repositories.identity_provider import (
    AuthStateListener,
    IdentityProvider,
    SignInProvider,
    Unsubscribe,
)
from plantgenius.modules.user_management.domain.repositories.profile_repository import ProfileRepository
from plantgenius.shared.config.settings import get_settings
from plantgenius.shared.infrastructure.api_client import StoreAPIClient
from plantgenius.shared.infrastructure.storage.local_storage import KeyValueStorage
from plantgenius.shared.utils.logging import get_logger
from plantgenius.shared.utils.validators import ensure_valid_email, ensure_valid_password

logger = get_logger(__name__)

AUTH_TOKEN_KEY = "@plantgenius_auth_token"
AUTH_USER_KEY = "@plantgenius_auth_user"


class AuthService:
    """
    Domain service for authentication and session persistence.

    Business rules:
    - Input is validated before any network call
    - A provider error on sign-up means no profile is written
    - Profile creation failing after a successful sign-up is logged, not rolled back
    - Sign-out always clears the stored session, even if the provider call fails
    - Sessions past their expiry are discarded on restore
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        profile_repository: ProfileRepository,
        storage: KeyValueStorage,
        api_client: Optional[StoreAPIClient] = None,
        session_ttl_days: Optional[int] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.identity_provider = identity_provider
        self.profile_repository = profile_repository
        self.storage = storage
        self.api_client = api_client
        self.session_ttl_days = (
            session_ttl_days if session_ttl_days is not None else get_settings().SESSION_TTL_DAYS
        )
        self.clock = clock
        self._session: Optional[AuthSession] = None

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def get_session(self) -> Optional[AuthSession]:
        return self._session

    async def initialize(self) -> Optional[AuthSession]:
        """
        Restore the stored session if it is still valid.

        Expired, partial or unreadable data clears storage and yields None.
        """
        try:
            token_raw = await self.storage.get_item(AUTH_TOKEN_KEY)
            user_raw = await self.storage.get_item(AUTH_USER_KEY)

            if token_raw and user_raw:
                token_data = json.loads(token_raw)
                session = AuthSession(
                    token=token_data["token"],
                    expires_at=token_data["expires_at"],
                    user=AuthUser.model_validate_json(user_raw),
                )
                if not session.is_expired(self.clock()):
                    self._set_session(session)
                    logger.info("Session restored", user_id=session.user.id)
                    return session
                logger.info("Stored session expired", user_id=session.user.id)
        except Exception as e:
            logger.error("Error initializing auth", error=str(e))

        await self.clear_session()
        return None

    async def persist_session(self, session: AuthSession) -> None:
        """Keep the session in memory and write both storage keys."""
        self._set_session(session)
        await self.storage.set_item(
            AUTH_TOKEN_KEY,
            json.dumps({"token": session.token, "expires_at": session.expires_at.isoformat()}),
        )
        await self.storage.set_item(AUTH_USER_KEY, session.user.model_dump_json())

    async def clear_session(self) -> None:
        self._set_session(None)
        await self.storage.remove_item(AUTH_TOKEN_KEY)
        await self.storage.remove_item(AUTH_USER_KEY)

    def on_auth_state_change(self, callback: AuthStateListener) -> Unsubscribe:
        return self.identity_provider.on_auth_state_change(callback)

    def _set_session(self, session: Optional[AuthSession]) -> None:
        self._session = session
        if self.api_client is not None:
            self.api_client.set_access_token(session.token if session else None)

    # ------------------------------------------------------------------
    # Email / password
    # ------------------------------------------------------------------

    async def sign_up_with_email(self, email: str, password: str, full_name: str) -> AuthResult:
        """
        Create an account and its profile.

        Returns AuthResult with the new session as data (None when the
        provider requires email confirmation before issuing one).
        """
        try:
            email = ensure_valid_email(email)
            ensure_valid_password(password)

            response = await self.identity_provider.sign_up(
                email, password, {"full_name": full_name}
            )
            if response.error:
                logger.warning("Sign up rejected by identity provider", email=email, reason=response.error)
                return AuthResult.failure(response.error, "EMAIL_SIGN_UP_FAILED")

            user = response.user or (response.session.user if response.session else None)
            if user is None:
                return AuthResult.failure("Sign up failed", "EMAIL_SIGN_UP_FAILED")

            await self._create_profile(user, full_name)

            session = response.session
            if session is not None:
                session.user.full_name = session.user.full_name or full_name
                await self.persist_session(session)

            logger.log_user_action("sign_up", user.id, extra={"provider": AuthProvider.EMAIL.value})
            return AuthResult.success(session)

        except Exception as e:
            logger.error("Email sign up error", email=email, error=str(e))
            return AuthResult.from_exception(e, "EMAIL_SIGN_UP_FAILED")

    async def sign_in_with_email(self, email: str, password: str) -> AuthResult:
        try:
            email = ensure_valid_email(email)
            if not password:
                return AuthResult.failure("Password is required", "VALIDATION_ERROR")

            response = await self.identity_provider.sign_in_with_password(email, password)
            if response.error:
                return AuthResult.failure(response.error, "EMAIL_SIGN_IN_FAILED")
            if response.session is None:
                return AuthResult.failure("Sign in failed", "EMAIL_SIGN_IN_FAILED")

            await self.persist_session(response.session)
            logger.log_user_action("sign_in", response.session.user.id, extra={"provider": "email"})
            return AuthResult.success(response.session)

        except Exception as e:
            logger.error("Email sign in error", email=email, error=str(e))
            return AuthResult.from_exception(e, "EMAIL_SIGN_IN_FAILED")

    async def _create_profile(self, user: AuthUser, full_name: Optional[str]) -> None:
        try:
            await self.profile_repository.create(
                ProfileDraft(
                    id=user.id,
                    email=user.email,
                    full_name=full_name,
                    auth_provider=AuthProvider.EMAIL,
                )
            )
        except Exception as e:
            # Account exists without a profile row; AuthContext recreates it on next load.
            logger.error("Profile creation failed after sign up", user_id=user.id, error=str(e))

    # ------------------------------------------------------------------
    # Federated providers
    # ------------------------------------------------------------------

    async def sign_in_with(self, provider: SignInProvider) -> AuthResult:
        """Run a federated sign-in flow and open a session for its identity."""
        error_code = f"{provider.name.upper()}_SIGN_IN_FAILED"
        try:
            identity = await provider.sign_in()
            session = AuthSession.issue(
                token=identity.token or secrets.token_urlsafe(32),
                user=identity.user,
                ttl_days=self.session_ttl_days,
                now=self.clock(),
            )
            await self.persist_session(session)
            logger.log_user_action("sign_in", session.user.id, extra={"provider": provider.name})
            return AuthResult.success(session)

        except Exception as e:
            logger.error(f"{provider.name} sign in error", error=str(e))
            return AuthResult.from_exception(e, error_code)

    # ------------------------------------------------------------------
    # Sign out / password reset
    # ------------------------------------------------------------------

    async def sign_out(self) -> AuthResult:
        user_id = self._session.user.id if self._session else None
        error: Optional[str] = None
        try:
            error = await self.identity_provider.sign_out()
        except Exception as e:
            error = str(e) or "Sign out failed"
        finally:
            await self.clear_session()

        if error:
            logger.warning("Identity provider sign out failed", user_id=user_id, error=error)
            return AuthResult.failure(error, "SIGN_OUT_FAILED")

        logger.info("Signed out", user_id=user_id)
        return AuthResult.success()

    async def reset_password(self, email: str) -> AuthResult:
        try:
            email = ensure_valid_email(email)
            error = await self.identity_provider.reset_password_for_email(email)
            if error:
                return AuthResult.failure(error, "PASSWORD_RESET_FAILED")
            logger.info("Password reset requested", email=email)
            return AuthResult.success()
        except Exception as e:
            logger.error("Password reset error", email=email, error=str(e))
            return AuthResult.from_exception(e, "PASSWORD_RESET_FAILED")
