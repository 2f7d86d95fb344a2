# 📄 File: plantgenius/modules/user_management/domain/services/subscription_service.py
# 🧭 Purpose (Layman Explanation):
# Turns a confirmed payment into a paid plan, lets users cancel their plan, and marks
# plans whose paid period is over as expired.
# 🧪 Purpose (Technical Summary):
# Subscription lifecycle service: computes billing periods, records subscriptions only
# after backend payment verification succeeds, flips status to cancelled and sweeps
# lapsed records to expired.
# 🔗 Dependencies:
# SubscriptionRepository, PaystackService
# 🔄 Connected Modules / Calls From:
# Checkout flow, AuthContext.refresh (to pick up the new subscription)

from datetime import datetime, timezone
from typing import Callable, Optional

from plantgenius.modules.payments.services.paystack_service import PaystackService
from plantgenius.modules.user_management.domain.models.subscription import (
    BillingCycle,
    PlanType,
    Subscription,
    SubscriptionDraft,
    SubscriptionStatus,
    add_billing_period,
)
from plantgenius.modules.user_management.domain.repositories.subscription_repository import (
    SubscriptionRepository,
)
from plantgenius.shared.core.exceptions import PaymentError
from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)


class SubscriptionService:
    """Creates, cancels and expires subscriptions."""

    def __init__(
        self,
        subscription_repository: SubscriptionRepository,
        payment_service: PaystackService,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.subscription_repository = subscription_repository
        self.payment_service = payment_service
        self.clock = clock

    async def create_subscription(
        self,
        user_id: str,
        plan: PlanType,
        cycle: BillingCycle,
        payment_reference: Optional[str] = None,
    ) -> Subscription:
        start = self.clock()
        draft = SubscriptionDraft(
            user_id=user_id,
            plan_type=plan,
            status=SubscriptionStatus.ACTIVE,
            start_date=start,
            end_date=add_billing_period(start, BillingCycle(cycle)),
            payment_reference=payment_reference,
        )
        return await self.subscription_repository.create(draft)

    async def activate_after_payment(
        self,
        user_id: str,
        reference: str,
        plan: PlanType,
        cycle: BillingCycle,
    ) -> Subscription:
        """
        Verify a payment with the backend, then record the subscription.

        Raises:
            PaymentError: verification failed or was declined
        """
        result = await self.payment_service.verify_payment(reference)
        if not result.success:
            logger.warning("Payment not verified; subscription not created", user_id=user_id, reference=reference)
            raise PaymentError("Payment could not be verified", reference=reference)

        subscription = await self.create_subscription(user_id, plan, cycle, payment_reference=reference)
        logger.log_user_action(
            "subscription_activated",
            user_id,
            extra={"plan_type": subscription.plan_type, "reference": reference},
        )
        return subscription

    async def cancel_subscription(self, subscription_id: str) -> Subscription:
        subscription = await self.subscription_repository.update(
            subscription_id, {"status": SubscriptionStatus.CANCELLED.value}
        )
        logger.info("Subscription cancelled", subscription_id=subscription_id, user_id=subscription.user_id)
        return subscription

    async def expire_subscriptions(
        self,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> Optional[Subscription]:
        """
        Flip the user's lapsed "active" subscription to expired.

        Failures are logged, never raised. Returns the expired record, or None
        when there was nothing to expire or the sweep failed.
        """
        now = now or self.clock()
        try:
            subscription = await self.subscription_repository.get_active(user_id)
            if (
                subscription is None
                or subscription.status != SubscriptionStatus.ACTIVE
                or subscription.end_date >= now
            ):
                return None

            expired = await self.subscription_repository.update(
                subscription.id, {"status": SubscriptionStatus.EXPIRED.value}
            )
            logger.info(
                "Expired subscriptions updated",
                subscription_id=subscription.id,
                user_id=user_id,
                end_date=subscription.end_date.isoformat(),
            )
            return expired

        except Exception as e:
            logger.error("Error checking expired subscriptions", user_id=user_id, error=str(e))
            return None
