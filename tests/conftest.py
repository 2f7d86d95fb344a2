"""Shared fixtures: in-memory fakes for the identity provider and the store repositories."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from plantgenius.modules.user_management.application.auth_context import AuthContext
from plantgenius.modules.user_management.domain.models import (
    AuthProvider,
    AuthSession,
    AuthUser,
    DailyScanCounter,
    Profile,
    ProfileDraft,
    Subscription,
    SubscriptionDraft,
)
from plantgenius.modules.user_management.domain.repositories import (
    DailyScanRepository,
    FederatedIdentity,
    IdentityProvider,
    IdentityResponse,
    ProfileRepository,
    SignInProvider,
    SubscriptionRepository,
)
from plantgenius.modules.user_management.domain.services import AuthService, EntitlementService
from plantgenius.shared.core.exceptions import NotFoundError
from plantgenius.shared.infrastructure.storage import InMemoryStorage

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
TODAY = "2026-10-19"
USER_ID = "user-123"
EMAIL = "grower@plantgenius.app"
PASSWORD = "Monstera123"


def make_user(user_id: str = USER_ID, email: str = EMAIL, **kwargs) -> AuthUser:
    return AuthUser(id=user_id, email=email, **kwargs)


def make_session(user: Optional[AuthUser] = None, expires_at: Optional[datetime] = None) -> AuthSession:
    return AuthSession(
        token="access-token",
        user=user or make_user(),
        expires_at=expires_at or NOW + timedelta(days=30),
    )


def make_subscription(
    status: str = "active",
    end_date: Optional[datetime] = None,
    user_id: str = USER_ID,
) -> Subscription:
    return Subscription(
        id="sub-1",
        user_id=user_id,
        plan_type="premium",
        status=status,
        start_date=NOW - timedelta(days=3),
        end_date=end_date or NOW + timedelta(days=27),
        payment_reference="PAY_1_abc",
    )


class FakeIdentityProvider(IdentityProvider):
    """Scriptable identity provider recording every call."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.sign_up_response = IdentityResponse()
        self.sign_in_response = IdentityResponse()
        self.sign_out_error: Optional[str] = None
        self.sign_out_exception: Optional[Exception] = None
        self.reset_error: Optional[str] = None
        self.listeners = []

    async def sign_up(self, email, password, metadata=None):
        self.calls.append(("sign_up", email, metadata))
        return self.sign_up_response

    async def sign_in_with_password(self, email, password):
        self.calls.append(("sign_in_with_password", email))
        return self.sign_in_response

    async def sign_out(self):
        self.calls.append(("sign_out",))
        if self.sign_out_exception:
            raise self.sign_out_exception
        return self.sign_out_error

    async def get_session(self):
        return None

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return lambda: self.listeners.remove(callback)

    async def reset_password_for_email(self, email):
        self.calls.append(("reset_password_for_email", email))
        return self.reset_error

    def emit(self, session: Optional[AuthSession]) -> None:
        for listener in list(self.listeners):
            listener(session)


class FakeProfileRepository(ProfileRepository):
    def __init__(self):
        self.profiles: Dict[str, Profile] = {}
        self.calls: List[tuple] = []
        self.fail_with: Optional[Exception] = None

    async def get_by_id(self, user_id):
        self.calls.append(("get_by_id", user_id))
        if self.fail_with:
            raise self.fail_with
        return self.profiles.get(user_id)

    async def create(self, draft: ProfileDraft):
        self.calls.append(("create", draft.id))
        if self.fail_with:
            raise self.fail_with
        profile = Profile(
            id=draft.id,
            email=draft.email,
            full_name=draft.full_name,
            avatar_url=draft.avatar_url,
            auth_provider=draft.auth_provider,
        )
        self.profiles[profile.id] = profile
        return profile

    async def update(self, user_id, updates: Dict[str, Any]):
        self.calls.append(("update", user_id, dict(updates)))
        if self.fail_with:
            raise self.fail_with
        if user_id not in self.profiles:
            raise NotFoundError("User not found")
        profile = self.profiles[user_id].model_copy(update=updates)
        self.profiles[user_id] = profile
        return profile

    @property
    def writes(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in ("create", "update")]


class FakeSubscriptionRepository(SubscriptionRepository):
    def __init__(self):
        self.active: Optional[Subscription] = None
        self.created: List[SubscriptionDraft] = []
        self.updates: List[tuple] = []
        self.fail_with: Optional[Exception] = None

    async def get_active(self, user_id):
        if self.fail_with:
            raise self.fail_with
        return self.active

    async def create(self, draft: SubscriptionDraft):
        self.created.append(draft)
        self.active = Subscription(id=f"sub-{len(self.created)}", **draft.model_dump())
        return self.active

    async def update(self, subscription_id, updates):
        if self.fail_with:
            raise self.fail_with
        self.updates.append((subscription_id, updates))
        self.active = self.active.model_copy(update=updates)
        return self.active


class FakeScanRepository(DailyScanRepository):
    def __init__(self):
        self.counts: Dict[tuple, int] = {}
        self.fail_with: Optional[Exception] = None

    async def get(self, user_id, scan_date):
        if self.fail_with:
            raise self.fail_with
        if (user_id, scan_date) not in self.counts:
            return None
        return DailyScanCounter(user_id=user_id, scan_date=scan_date, scan_count=self.counts[(user_id, scan_date)])

    async def increment(self, user_id, scan_date):
        if self.fail_with:
            raise self.fail_with
        key = (user_id, scan_date)
        self.counts[key] = self.counts.get(key, 0) + 1
        return DailyScanCounter(user_id=user_id, scan_date=scan_date, scan_count=self.counts[key])


class FakeSignInProvider(SignInProvider):
    def __init__(self, name="google", identity: Optional[FederatedIdentity] = None, error: Optional[Exception] = None):
        self.name = name
        self.identity = identity
        self.error = error

    async def sign_in(self):
        if self.error:
            raise self.error
        return self.identity


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def profiles():
    return FakeProfileRepository()


@pytest.fixture
def subscriptions():
    return FakeSubscriptionRepository()


@pytest.fixture
def scans():
    return FakeScanRepository()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def auth_service(identity_provider, profiles, storage, clock):
    return AuthService(
        identity_provider=identity_provider,
        profile_repository=profiles,
        storage=storage,
        session_ttl_days=30,
        clock=clock,
    )


@pytest.fixture
def entitlement_service(profiles, subscriptions, scans, clock):
    return EntitlementService(
        profile_repository=profiles,
        subscription_repository=subscriptions,
        scan_repository=scans,
        daily_limit=5,
        clock=clock,
    )


@pytest.fixture
def existing_profile(profiles):
    profile = Profile(id=USER_ID, email=EMAIL, full_name="Ada Fern", auth_provider=AuthProvider.EMAIL)
    profiles.profiles[USER_ID] = profile
    return profile


@pytest.fixture
def auth_context(auth_service, entitlement_service, profiles):
    return AuthContext(
        auth_service=auth_service,
        entitlement_service=entitlement_service,
        profile_repository=profiles,
    )

