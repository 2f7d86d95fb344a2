# 📄 File: plantgenius/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# The decision makers: who is signed in, who may scan, who has paid.
# 🧪 Purpose (Technical Summary):
# Domain service exports.

from .auth_service import AuthService
from .entitlement_service import Entitlements, EntitlementService
from .subscription_service import SubscriptionService

__all__ = [
    "AuthService",
    "Entitlements",
    "EntitlementService",
    "SubscriptionService",
]
