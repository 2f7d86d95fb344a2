# 📄 File: plantgenius/modules/user_management/domain/models/subscription.py
# 🧭 Purpose (Layman Explanation):
# Defines a user's paid plan: which plan, whether it is still running, and when it ends.
# 🧪 Purpose (Technical Summary):
# Domain model for Subscription records returned by the backend, with the activity check
# used by the entitlement reconciler and the period arithmetic used when creating one.
# 🔗 Dependencies:
# pydantic, datetime, enum
# 🔄 Connected Modules / Calls From:
# SubscriptionRepository, SubscriptionService, EntitlementService, AuthContext

import calendar
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubscriptionStatus(str, Enum):
    """Subscription status enumeration"""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class PlanType(str, Enum):
    """Plan tiers sold through the payment gateway"""
    BASIC = "basic"
    PREMIUM = "premium"


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def add_billing_period(start: datetime, cycle: BillingCycle) -> datetime:
    """
    End of a billing period starting at `start`.

    Calendar arithmetic: one month or one year later, clamped to the
    last day of the target month (Jan 31 + 1 month -> Feb 28/29).
    """
    if cycle == BillingCycle.YEARLY:
        year, month = start.year + 1, start.month
    else:
        year, month = start.year + start.month // 12, start.month % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


class Subscription(BaseModel):
    """
    Subscription domain model.

    At most one active subscription per user is intended; the backend
    does not enforce it atomically.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, extra="ignore")

    id: str = Field(alias="_id")
    user_id: str = Field(alias="userId")
    plan_type: PlanType = Field(alias="planType")
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    start_date: datetime = Field(alias="startDate")
    end_date: datetime = Field(alias="endDate")
    payment_reference: Optional[str] = Field(default=None, alias="paymentReference")

    @field_validator("start_date", "end_date")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        return _as_utc(v)

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """
        Active iff flagged active and the paid period has not ended.

        The end date is authoritative over a stale "active" flag.
        """
        now = now or datetime.now(timezone.utc)
        return self.status == SubscriptionStatus.ACTIVE and now <= self.end_date


class SubscriptionDraft(BaseModel):
    """Payload for POST /subscriptions."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    user_id: str = Field(alias="userId")
    plan_type: PlanType = Field(alias="planType")
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    start_date: datetime = Field(alias="startDate")
    end_date: datetime = Field(alias="endDate")
    payment_reference: Optional[str] = Field(default=None, alias="paymentReference")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
