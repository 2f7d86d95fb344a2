"""Repository and external collaborator interfaces for user management."""

from .identity_provider import (
    AuthStateListener,
    FederatedIdentity,
    IdentityProvider,
    IdentityResponse,
    SignInProvider,
    Unsubscribe,
)
from .profile_repository import ProfileRepository
from .scan_repository import DailyScanRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    "AuthStateListener",
    "FederatedIdentity",
    "IdentityProvider",
    "IdentityResponse",
    "SignInProvider",
    "Unsubscribe",
    "ProfileRepository",
    "DailyScanRepository",
    "SubscriptionRepository",
]
