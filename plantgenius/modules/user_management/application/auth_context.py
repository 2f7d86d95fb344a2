# 📄 File: plantgenius/modules/user_management/application/auth_context.py
# 🧭 Purpose (Layman Explanation):
# The single place the app asks "who is signed in, are they paying, and how many free
# scans do they have left today?" and the buttons for signing in and out.
# 🧪 Purpose (Technical Summary):
# Application-layer session/entitlement context. Owns the SessionState machine, relays
# identity provider notifications, reconciles entitlements after every auth transition and
# notifies observers on each state change. Public operations return AuthResult variants.
# 🔗 Dependencies:
# AuthService, EntitlementService, ProfileRepository, sign-in providers
# 🔄 Connected Modules / Calls From:
# UI layer (screens observe it via subscribe()), create_auth_context() wiring

import asyncio
from typing import Callable, List, Optional, Set

from plantgenius.modules.user_management.domain.models.daily_scan import (
    DailyScanCounter,
    remaining_scans,
)
from plantgenius.modules.user_management.domain.models.profile import Profile, ProfileDraft
from plantgenius.modules.user_management.domain.models.results import AuthResult
from plantgenius.modules.user_management.domain.models.session import (
    AuthProvider,
    AuthSession,
    AuthUser,
    SessionState,
)
from plantgenius.modules.user_management.domain.models.subscription import Subscription
from plantgenius.modules.user_management.domain.repositories.identity_provider import (
    SignInProvider,
    Unsubscribe,
)
from plantgenius.modules.user_management.domain.repositories.profile_repository import ProfileRepository
from plantgenius.modules.user_management.domain.services.auth_service import AuthService
from plantgenius.modules.user_management.domain.services.entitlement_service import (
    Entitlements,
    EntitlementService,
)
from plantgenius.shared.core.exceptions import NotFoundError
from plantgenius.shared.infrastructure.api_client import StoreAPIClient
from plantgenius.shared.utils.logging import get_logger, log_context
from plantgenius.shared.utils.validators import ensure_valid_image_uri

logger = get_logger(__name__)

StateListener = Callable[["AuthContext"], None]


class AuthContext:
    """
    Explicit session context.

    Attributes mirror what the screens render: session, user, profile,
    subscription, daily_scans_remaining, state and loading.
    """

    def __init__(
        self,
        auth_service: AuthService,
        entitlement_service: EntitlementService,
        profile_repository: ProfileRepository,
        google_provider: Optional[SignInProvider] = None,
        apple_provider: Optional[SignInProvider] = None,
        api_client: Optional[StoreAPIClient] = None,
    ):
        self.auth_service = auth_service
        self.entitlement_service = entitlement_service
        self.profile_repository = profile_repository
        self.google_provider = google_provider
        self.apple_provider = apple_provider
        self.api_client = api_client

        self.session: Optional[AuthSession] = None
        self.profile: Optional[Profile] = None
        self.subscription: Optional[Subscription] = None
        self.daily_scans_remaining: int = entitlement_service.daily_limit
        self.state: SessionState = SessionState.UNAUTHENTICATED
        self.loading: bool = True

        self._listeners: List[StateListener] = []
        self._unsubscribe_provider: Optional[Unsubscribe] = None
        self._provider_tasks: Set[asyncio.Task] = set()

    @property
    def user(self) -> Optional[AuthUser]:
        return self.session.user if self.session else None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Restore the stored session, subscribe to provider changes, load entitlements."""
        self.loading = True
        session = await self.auth_service.initialize()
        self._unsubscribe_provider = self.auth_service.on_auth_state_change(
            self._on_provider_session
        )

        if session is not None:
            await self._establish(session)
        else:
            self._reset()

        self.loading = False
        self._notify()

    async def close(self) -> None:
        if self._unsubscribe_provider is not None:
            self._unsubscribe_provider()
            self._unsubscribe_provider = None
        for task in list(self._provider_tasks):
            task.cancel()
        if self.api_client is not None:
            await self.api_client.aclose()

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        """Register an observer called after every state change."""
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error("State listener failed", error=str(e))

    # ------------------------------------------------------------------
    # Provider notifications
    # ------------------------------------------------------------------

    def _on_provider_session(self, session: Optional[AuthSession]) -> None:
        task = asyncio.ensure_future(self._apply_provider_session(session))
        self._provider_tasks.add(task)
        task.add_done_callback(self._provider_tasks.discard)

    async def _apply_provider_session(self, session: Optional[AuthSession]) -> None:
        try:
            if session is not None:
                await self.auth_service.persist_session(session)
                await self._establish(session)
            elif self.session is not None and self.session.user.auth_provider == AuthProvider.EMAIL:
                # Federated sessions are not owned by the identity provider
                await self.auth_service.clear_session()
                self._reset()
            elif self.state == SessionState.AUTHENTICATING:
                self.state = SessionState.UNAUTHENTICATED
        except Exception as e:
            logger.error("Failed to apply identity provider change", error=str(e))
        finally:
            self.loading = False
            self._notify()

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    async def _establish(self, session: AuthSession) -> None:
        self.session = session
        self.state = SessionState.AUTHENTICATED
        with log_context(user_id=session.user.id):
            self._apply(await self.entitlement_service.load_entitlements(session.user.id))
            if self.profile is None:
                self.profile = await self._repair_profile(session.user)

    async def _repair_profile(self, user: AuthUser) -> Optional[Profile]:
        """
        Recreate a profile row that sign-up failed to write.

        Only creates when a direct read confirms the row is absent; a read
        that fails leaves the profile unset until the next refresh.
        """
        try:
            profile = await self.profile_repository.get_by_id(user.id)
            if profile is not None:
                return profile
            profile = await self.profile_repository.create(self._draft_for(user))
            logger.info("Recreated missing profile", user_id=user.id)
            return profile
        except Exception as e:
            logger.warning("Could not repair missing profile", user_id=user.id, error=str(e))
            return None

    @staticmethod
    def _draft_for(user: AuthUser, **overrides) -> ProfileDraft:
        fields = {
            "id": user.id,
            "email": user.email,
            "full_name": user.full_name,
            "avatar_url": user.avatar_url,
            "auth_provider": user.auth_provider,
        }
        fields.update(overrides)
        return ProfileDraft(**fields)

    def _apply(self, entitlements: Entitlements) -> None:
        self.profile = entitlements.profile
        self.subscription = entitlements.subscription
        self.daily_scans_remaining = entitlements.daily_scans_remaining

    def _reset(self) -> None:
        self.session = None
        self.profile = None
        self.subscription = None
        self.daily_scans_remaining = self.entitlement_service.daily_limit
        self.state = SessionState.UNAUTHENTICATED

    async def refresh(self) -> None:
        """Reload profile, subscription and today's count for the current user."""
        if self.session is None:
            return
        await self._establish(self.session)
        self._notify()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def _authenticate(self, operation) -> AuthResult:
        self.state = SessionState.AUTHENTICATING
        self._notify()
        try:
            result = await operation
            if result.ok and isinstance(result.data, AuthSession):
                await self._establish(result.data)
            else:
                self.state = (
                    SessionState.AUTHENTICATED if self.session else SessionState.UNAUTHENTICATED
                )
            return result
        finally:
            self._notify()

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthResult:
        return await self._authenticate(
            self.auth_service.sign_up_with_email(email, password, full_name)
        )

    async def sign_in(self, email: str, password: str) -> AuthResult:
        return await self._authenticate(self.auth_service.sign_in_with_email(email, password))

    async def sign_in_with_google(self) -> AuthResult:
        if self.google_provider is None:
            return AuthResult.failure("Google Sign In is not configured", "GOOGLE_SIGN_IN_FAILED")
        return await self._authenticate(self.auth_service.sign_in_with(self.google_provider))

    async def sign_in_with_apple(self) -> AuthResult:
        if self.apple_provider is None:
            return AuthResult.failure("Apple Sign In is not available", "APPLE_SIGN_IN_FAILED")
        return await self._authenticate(self.auth_service.sign_in_with(self.apple_provider))

    async def sign_out(self) -> AuthResult:
        result = await self.auth_service.sign_out()
        self._reset()
        self._notify()
        return result

    async def reset_password(self, email: str) -> AuthResult:
        return await self.auth_service.reset_password(email)

    # ------------------------------------------------------------------
    # Profile & entitlements
    # ------------------------------------------------------------------

    async def update_profile(
        self,
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> AuthResult:
        """PATCH the current user's profile and reload it."""
        if self.session is None:
            return AuthResult.failure("No user logged in", "NO_USER")

        user_id = self.session.user.id
        try:
            updates = {}
            if full_name is not None:
                updates["full_name"] = full_name.strip()
            if avatar_url is not None:
                updates["avatar_url"] = ensure_valid_image_uri(avatar_url)
            if not updates:
                return AuthResult.success(self.profile)

            try:
                await self.profile_repository.update(user_id, updates)
                self.profile = await self.profile_repository.get_by_id(user_id)
            except NotFoundError:
                # No row to patch: sign-up never wrote one
                self.profile = await self.profile_repository.create(
                    self._draft_for(self.session.user, **updates)
                )

            if self.profile is not None:
                self.session.user.full_name = self.profile.full_name
                self.session.user.avatar_url = self.profile.avatar_url
                await self.auth_service.persist_session(self.session)

            logger.log_user_action("update_profile", user_id, extra={"fields": sorted(updates)})
            return AuthResult.success(self.profile)

        except Exception as e:
            logger.error("Profile update failed", user_id=user_id, error=str(e))
            return AuthResult.from_exception(e, "PROFILE_UPDATE_FAILED")
        finally:
            self._notify()

    async def increment_daily_scan(self) -> Optional[DailyScanCounter]:
        """Count one scan for today; no-op when signed out."""
        if self.session is None:
            return None

        user_id = self.session.user.id
        try:
            counter = await self.entitlement_service.increment_daily_scan(user_id)
        except Exception as e:
            logger.error("Error incrementing daily scan", user_id=user_id, error=str(e))
            # The write may have landed before the failure; resync from the store
            count = await self.entitlement_service.load_daily_count(user_id)
            if count is not None:
                self.daily_scans_remaining = remaining_scans(count, self.entitlement_service.daily_limit)
                self._notify()
            return None

        self.daily_scans_remaining = remaining_scans(
            counter.scan_count, self.entitlement_service.daily_limit
        )
        self._notify()
        return counter

    def has_active_subscription(self) -> bool:
        if self.subscription is None:
            return False
        return self.subscription.is_active(self.entitlement_service.clock())

    def can_scan(self) -> bool:
        return self.has_active_subscription() or self.daily_scans_remaining > 0
