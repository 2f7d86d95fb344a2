# 📄 File: plantgenius/modules/user_management/infrastructure/external/supabase_auth.py
# 🧭 Purpose (Layman Explanation):
# Connects our sign-up, sign-in and password reset screens to Supabase, the service that
# actually checks passwords and issues sign-in tokens.
# 🧪 Purpose (Technical Summary):
# IdentityProvider implementation over the supabase async client. Supabase responses and
# AuthError exceptions are mapped to IdentityResponse / error strings so callers never see
# SDK types.
# 🔗 Dependencies:
# - supabase (AsyncClient auth API)
# - plantgenius.shared.config.supabase (SupabaseManager)
# 🔄 Connected Modules / Calls From:
# - AuthService (via the IdentityProvider interface)

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from supabase import AuthError as SupabaseAuthError

from plantgenius.modules.user_management.domain.models.session import (
    AuthProvider,
    AuthSession,
    AuthUser,
)
from plantgenius.modules.user_management.domain.repositories.identity_provider import (
    AuthStateListener,
    IdentityProvider,
    IdentityResponse,
    Unsubscribe,
)
from plantgenius.shared.config.settings import get_settings
from plantgenius.shared.config.supabase import SupabaseManager, get_supabase_manager
from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)


def to_auth_user(user: Any) -> Optional[AuthUser]:
    """Map a Supabase User to AuthUser."""
    if user is None:
        return None
    metadata = getattr(user, "user_metadata", None) or {}
    app_metadata = getattr(user, "app_metadata", None) or {}
    provider = app_metadata.get("provider", AuthProvider.EMAIL.value)
    if provider not in {p.value for p in AuthProvider}:
        provider = AuthProvider.EMAIL.value
    return AuthUser(
        id=user.id,
        email=user.email or "",
        full_name=metadata.get("full_name"),
        avatar_url=metadata.get("avatar_url"),
        auth_provider=provider,
    )


def to_auth_session(session: Any, ttl_days: Optional[int] = None) -> Optional[AuthSession]:
    """
    Map a Supabase Session to AuthSession.

    Falls back to the configured session lifetime when Supabase reports no expiry.
    """
    if session is None or getattr(session, "user", None) is None:
        return None
    user = to_auth_user(session.user)
    expires_at = getattr(session, "expires_at", None)
    if expires_at:
        return AuthSession(
            token=session.access_token,
            user=user,
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )
    ttl = ttl_days if ttl_days is not None else get_settings().SESSION_TTL_DAYS
    return AuthSession.issue(token=session.access_token, user=user, ttl_days=ttl)


class SupabaseIdentityProvider(IdentityProvider):
    """
    Supabase-backed identity provider.

    Credential rejections come back as `error` strings; transport and
    configuration failures propagate as exceptions.
    """

    def __init__(self, manager: Optional[SupabaseManager] = None, auth_client: Any = None):
        self._manager = manager or get_supabase_manager()
        self._auth = auth_client
        self._pending = []

    async def _auth_client(self):
        if self._auth is None:
            self._auth = await self._manager.get_auth_client()
            for entry in self._pending:
                entry["subscription"] = self._auth.on_auth_state_change(entry["relay"])
            self._pending = []
        return self._auth

    async def sign_up(
        self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None
    ) -> IdentityResponse:
        auth = await self._auth_client()
        try:
            response = await auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata or {}}}
            )
        except SupabaseAuthError as e:
            logger.warning("Supabase sign up rejected", email=email, error=e.message)
            return IdentityResponse(error=e.message)

        return IdentityResponse(
            user=to_auth_user(response.user),
            session=to_auth_session(response.session),
        )

    async def sign_in_with_password(self, email: str, password: str) -> IdentityResponse:
        auth = await self._auth_client()
        try:
            response = await auth.sign_in_with_password({"email": email, "password": password})
        except SupabaseAuthError as e:
            logger.warning("Supabase sign in rejected", email=email, error=e.message)
            return IdentityResponse(error=e.message)

        return IdentityResponse(
            user=to_auth_user(response.user),
            session=to_auth_session(response.session),
        )

    async def sign_out(self) -> Optional[str]:
        auth = await self._auth_client()
        try:
            await auth.sign_out()
        except SupabaseAuthError as e:
            return e.message
        return None

    async def get_session(self) -> Optional[AuthSession]:
        auth = await self._auth_client()
        return to_auth_session(await auth.get_session())

    def on_auth_state_change(self, callback: AuthStateListener) -> Unsubscribe:
        """
        Relay Supabase auth events as Optional[AuthSession].

        Listeners registered before the client exists are attached when it is created.
        """
        def _relay(event, session):
            logger.debug("Supabase auth state changed", auth_event=str(event))
            callback(to_auth_session(session))

        if self._auth is not None:
            return self._auth.on_auth_state_change(_relay).unsubscribe

        entry = {"relay": _relay, "subscription": None}
        self._pending.append(entry)

        def _unsubscribe():
            if entry in self._pending:
                self._pending.remove(entry)
            if entry["subscription"] is not None:
                entry["subscription"].unsubscribe()

        return _unsubscribe

    async def reset_password_for_email(self, email: str) -> Optional[str]:
        auth = await self._auth_client()
        try:
            await auth.reset_password_for_email(email, {})
        except SupabaseAuthError as e:
            return e.message
        return None
