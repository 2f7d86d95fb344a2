# 📄 File: plantgenius/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the core user data shapes - who is signed in, their profile, plan and daily scans
# 🧪 Purpose (Technical Summary):
# Package exports for session, profile, subscription, daily-scan and result models

from .session import AuthProvider, AuthSession, AuthUser, SessionState
from .profile import Profile, ProfileDraft
from .subscription import (
    BillingCycle,
    PlanType,
    Subscription,
    SubscriptionDraft,
    SubscriptionStatus,
    add_billing_period,
)
from .daily_scan import DailyScanCounter, remaining_scans
from .results import AuthError, AuthResult

__all__ = [
    "AuthProvider",
    "AuthSession",
    "AuthUser",
    "SessionState",
    "Profile",
    "ProfileDraft",
    "BillingCycle",
    "PlanType",
    "Subscription",
    "SubscriptionDraft",
    "SubscriptionStatus",
    "add_billing_period",
    "DailyScanCounter",
    "remaining_scans",
    "AuthError",
    "AuthResult",
]
