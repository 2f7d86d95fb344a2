# 📄 File: plantgenius/modules/user_management/infrastructure/store/subscription_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and records users' paid plans on the PlantGenius backend.
# 🧪 Purpose (Technical Summary):
# Concrete SubscriptionRepository over the REST store:
# GET /subscriptions/active/{userId}, POST /subscriptions, PATCH /subscriptions/{id}.
# 🔗 Dependencies:
# - plantgenius.shared.infrastructure.api_client (StoreAPIClient)
# 🔄 Connected Modules / Calls From:
# - EntitlementService, SubscriptionService

from typing import Any, Dict, Optional
from urllib.parse import quote

from plantgenius.modules.user_management.domain.models.subscription import (
    Subscription,
    SubscriptionDraft,
)
from plantgenius.modules.user_management.domain.repositories.subscription_repository import (
    SubscriptionRepository,
)
from plantgenius.shared.core.exceptions import NotFoundError
from plantgenius.shared.infrastructure.api_client import StoreAPIClient
from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)


class SubscriptionRepositoryImpl(SubscriptionRepository):
    """REST implementation of the SubscriptionRepository interface."""

    def __init__(self, api: StoreAPIClient):
        self._api = api

    async def get_active(self, user_id: str) -> Optional[Subscription]:
        try:
            data = await self._api.get(f"/subscriptions/active/{quote(user_id, safe='')}")
        except NotFoundError:
            return None

        # The backend wraps the record: {"subscription": {...} | null}
        record = data.get("subscription") if isinstance(data, dict) else None
        if not record:
            logger.debug("No active subscription", user_id=user_id)
            return None
        return Subscription.model_validate(record)

    async def create(self, draft: SubscriptionDraft) -> Subscription:
        data = await self._api.post("/subscriptions", draft.to_payload())
        subscription = Subscription.model_validate(data)
        logger.info(
            "Created subscription",
            user_id=subscription.user_id,
            plan_type=subscription.plan_type,
            reference=subscription.payment_reference,
        )
        return subscription

    async def update(self, subscription_id: str, updates: Dict[str, Any]) -> Subscription:
        data = await self._api.patch(f"/subscriptions/{quote(subscription_id, safe='')}", updates)
        return Subscription.model_validate(data)
