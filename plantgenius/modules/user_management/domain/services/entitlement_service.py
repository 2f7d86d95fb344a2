# 📄 File: plantgenius/modules/user_management/domain/services/entitlement_service.py
# 🧭 Purpose (Layman Explanation):
# Decides whether a user may scan a plant right now: paying users always can,
# free users get a handful of scans per day.
# 🧪 Purpose (Technical Summary):
# Entitlement reconciler: fans out the profile, active-subscription and today's-counter
# reads concurrently, degrades any failed read to "none", and derives
# has_active_subscription / daily_scans_remaining / can_scan from the joined result.
# 🔗 Dependencies:
# asyncio, repositories, plantgenius.shared.config.settings
# 🔄 Connected Modules / Calls From:
# AuthContext (session establishment, refresh, scan accounting)

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, TypeVar

from plantgenius.modules.user_management.domain.models.daily_scan import (
    DailyScanCounter,
    remaining_scans,
)
from plantgenius.modules.user_management.domain.models.profile import Profile
from plantgenius.modules.user_management.domain.models.subscription import Subscription
from plantgenius.modules.user_management.domain.repositories.profile_repository import ProfileRepository
from plantgenius.modules.user_management.domain.repositories.scan_repository import DailyScanRepository
from plantgenius.modules.user_management.domain.repositories.subscription_repository import (
    SubscriptionRepository,
)
from plantgenius.shared.config.settings import get_settings
from plantgenius.shared.core.exceptions import NotFoundError
from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
Clock = Callable[[], datetime]

DEFAULT_DAILY_LIMIT = 5


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Entitlements:
    """
    Joined view of the three independently sourced records.

    Any of profile/subscription may be None; a missing counter is a count of 0.
    """

    profile: Optional[Profile] = None
    subscription: Optional[Subscription] = None
    daily_count: int = 0
    daily_limit: int = DEFAULT_DAILY_LIMIT

    def has_active_subscription(self, now: Optional[datetime] = None) -> bool:
        if self.subscription is None:
            return False
        return self.subscription.is_active(now)

    @property
    def daily_scans_remaining(self) -> int:
        return remaining_scans(self.daily_count, self.daily_limit)

    def can_scan(self, now: Optional[datetime] = None) -> bool:
        return self.has_active_subscription(now) or self.daily_scans_remaining > 0


class EntitlementService:
    """
    Domain service computing a user's current access rights.

    Business rules:
    - Free users get `daily_limit` scans per UTC calendar day
    - An active, unexpired subscription lifts the daily limit
    - A failed read never aborts initialization; it counts as "no record"
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        subscription_repository: SubscriptionRepository,
        scan_repository: DailyScanRepository,
        daily_limit: Optional[int] = None,
        clock: Clock = utc_now,
    ):
        self.profile_repository = profile_repository
        self.subscription_repository = subscription_repository
        self.scan_repository = scan_repository
        self.daily_limit = daily_limit if daily_limit is not None else get_settings().DAILY_SCAN_LIMIT
        self.clock = clock

    def today(self) -> str:
        """UTC calendar day used to key scan counters (YYYY-MM-DD)."""
        return self.clock().astimezone(timezone.utc).date().isoformat()

    async def load_entitlements(self, user_id: str) -> Entitlements:
        """
        Fetch profile, active subscription and today's counter concurrently.

        Never raises: each read degrades to None on failure.
        """
        scan_date = self.today()
        profile, subscription, counter = await asyncio.gather(
            self._optional("profile", user_id, self.profile_repository.get_by_id(user_id)),
            self._optional("subscription", user_id, self.subscription_repository.get_active(user_id)),
            self._optional("daily_scan", user_id, self.scan_repository.get(user_id, scan_date)),
        )

        entitlements = Entitlements(
            profile=profile,
            subscription=subscription,
            daily_count=counter.scan_count if counter else 0,
            daily_limit=self.daily_limit,
        )
        logger.debug(
            "Entitlements loaded",
            user_id=user_id,
            has_profile=profile is not None,
            has_active_subscription=entitlements.has_active_subscription(self.clock()),
            daily_scans_remaining=entitlements.daily_scans_remaining,
        )
        return entitlements

    async def load_daily_count(self, user_id: str) -> Optional[int]:
        """Today's scan count, or None when the store cannot be read."""
        try:
            counter = await self.scan_repository.get(user_id, self.today())
        except NotFoundError:
            return 0
        except Exception as e:
            logger.warning("Failed to load daily scan count", user_id=user_id, error=str(e))
            return None
        return counter.scan_count if counter else 0

    async def increment_daily_scan(self, user_id: str) -> DailyScanCounter:
        """
        Record one scan for today.

        The store creates the counter at 1 when absent and adds one otherwise.
        Not linearizable across devices.
        """
        counter = await self.scan_repository.increment(user_id, self.today())
        logger.info(
            "Daily scan recorded",
            user_id=user_id,
            scan_date=counter.scan_date,
            scan_count=counter.scan_count,
        )
        return counter

    async def _optional(self, source: str, user_id: str, read: Awaitable[Optional[T]]) -> Optional[T]:
        try:
            return await read
        except NotFoundError:
            return None
        except Exception as e:
            logger.warning(
                f"Failed to load {source}; treating as absent",
                source=source,
                user_id=user_id,
                error=str(e),
            )
            return None
