# 📄 File: plantgenius/modules/user_management/domain/repositories/subscription_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines what subscription operations our app can perform, like finding the plan a user
# is currently paying for or recording a new one after payment.
# 🧪 Purpose (Technical Summary):
# Abstract repository interface for subscription records.
# 🔗 Dependencies:
# abc, Subscription domain model
# 🔄 Connected Modules / Calls From:
# EntitlementService (active subscription read), SubscriptionService (create/cancel)

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from plantgenius.modules.user_management.domain.models.subscription import (
    Subscription,
    SubscriptionDraft,
)


class SubscriptionRepository(ABC):
    """Abstract repository interface for subscription data access operations."""

    @abstractmethod
    async def get_active(self, user_id: str) -> Optional[Subscription]:
        """Get the user's active subscription, if any."""
        pass

    @abstractmethod
    async def create(self, draft: SubscriptionDraft) -> Subscription:
        """Create a new subscription."""
        pass

    @abstractmethod
    async def update(self, subscription_id: str, updates: Dict[str, Any]) -> Subscription:
        """Update subscription information."""
        pass
