# 📄 File: plantgenius/modules/user_management/application/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Plugs all the pieces together (backend client, Supabase, local storage, Google and Apple)
# so the app gets one ready-to-use sign-in and entitlement context.
# 🧪 Purpose (Technical Summary):
# Composition root for the user-management module: builds the REST store client,
# repositories, identity provider, local storage and federated providers from Settings and
# returns an AuthContext. Platform callables for OAuth are injected by the host app.
# 🔗 Dependencies:
# plantgenius.shared.*, store/external infrastructure, domain services
# 🔄 Connected Modules / Calls From:
# Host application startup

"""
User Management Module Dependencies

create_auth_context() is the only place concrete infrastructure is chosen;
everything below it depends on the abstract repositories and providers.
"""

from typing import Optional

from plantgenius.modules.payments.services.paystack_service import PaystackService
from plantgenius.modules.user_management.application.auth_context import AuthContext
from plantgenius.modules.user_management.domain.services.auth_service import AuthService
from plantgenius.modules.user_management.domain.services.entitlement_service import EntitlementService
from plantgenius.modules.user_management.domain.services.subscription_service import SubscriptionService
from plantgenius.modules.user_management.infrastructure.external.oauth_providers import (
    AppleCredentialRequest,
    AppleSignInProvider,
    Authorizer,
    GoogleSignInProvider,
)
from plantgenius.modules.user_management.infrastructure.external.supabase_auth import (
    SupabaseIdentityProvider,
)
from plantgenius.modules.user_management.infrastructure.store.profile_repository_impl import (
    ProfileRepositoryImpl,
)
from plantgenius.modules.user_management.infrastructure.store.scan_repository_impl import (
    DailyScanRepositoryImpl,
)
from plantgenius.modules.user_management.infrastructure.store.subscription_repository_impl import (
    SubscriptionRepositoryImpl,
)
from plantgenius.shared.config.settings import Settings, get_settings
from plantgenius.shared.config.supabase import SupabaseManager
from plantgenius.shared.infrastructure.api_client import StoreAPIClient
from plantgenius.shared.infrastructure.storage.local_storage import JSONFileStorage, KeyValueStorage
from plantgenius.shared.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_auth_context(
    settings: Optional[Settings] = None,
    authorize: Optional[Authorizer] = None,
    request_apple_credential: Optional[AppleCredentialRequest] = None,
    storage: Optional[KeyValueStorage] = None,
    api_client: Optional[StoreAPIClient] = None,
) -> AuthContext:
    """
    Build a fully wired AuthContext.

    Google sign-in is enabled when `authorize` is given; Apple sign-in when
    `request_apple_credential` is given and the platform is iOS.
    """
    settings = settings or get_settings()
    setup_logging()

    api = api_client or StoreAPIClient(settings=settings)
    profiles = ProfileRepositoryImpl(api)

    auth_service = AuthService(
        identity_provider=SupabaseIdentityProvider(SupabaseManager(settings)),
        profile_repository=profiles,
        storage=storage or JSONFileStorage(settings.STORAGE_PATH),
        api_client=api,
        session_ttl_days=settings.SESSION_TTL_DAYS,
    )
    entitlement_service = EntitlementService(
        profile_repository=profiles,
        subscription_repository=SubscriptionRepositoryImpl(api),
        scan_repository=DailyScanRepositoryImpl(api),
        daily_limit=settings.DAILY_SCAN_LIMIT,
    )

    google = GoogleSignInProvider(authorize, profiles, settings) if authorize else None
    apple = None
    if request_apple_credential and settings.PLATFORM == "ios":
        apple = AppleSignInProvider(request_apple_credential, profiles, settings)

    logger.info(
        "Auth context created",
        environment=settings.ENVIRONMENT,
        platform=settings.PLATFORM,
        google_enabled=google is not None,
        apple_enabled=apple is not None,
    )
    return AuthContext(
        auth_service=auth_service,
        entitlement_service=entitlement_service,
        profile_repository=profiles,
        google_provider=google,
        apple_provider=apple,
        api_client=api,
    )


def create_subscription_service(
    api_client: StoreAPIClient,
    settings: Optional[Settings] = None,
) -> SubscriptionService:
    """Subscription service sharing the context's backend client."""
    return SubscriptionService(
        subscription_repository=SubscriptionRepositoryImpl(api_client),
        payment_service=PaystackService(api_client, settings),
    )
