# 📄 File: plantgenius/modules/payments/domain/models.py
# 🧭 Purpose (Layman Explanation):
# The price list for PlantGenius plans and the shapes of "payment started" and
# "payment checked" answers.
# 🧪 Purpose (Technical Summary):
# Payment DTOs (initiation request/response, verification result) and the plan price
# table in kobo (smallest NGN unit), keyed by plan tier and billing cycle.
# 🔗 Dependencies:
# pydantic, subscription enums
# 🔄 Connected Modules / Calls From:
# PaystackService, SubscriptionService

from datetime import datetime
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from plantgenius.modules.user_management.domain.models.subscription import BillingCycle, PlanType

# Amounts in kobo
PLAN_PRICES: Dict[Tuple[PlanType, BillingCycle], int] = {
    (PlanType.BASIC, BillingCycle.MONTHLY): 29900,
    (PlanType.BASIC, BillingCycle.YEARLY): 322800,
    (PlanType.PREMIUM, BillingCycle.MONTHLY): 49900,
    (PlanType.PREMIUM, BillingCycle.YEARLY): 527600,
}


class PaymentInitiationData(BaseModel):
    """What the checkout screen asks to pay for."""

    email: str
    amount: int = Field(gt=0, description="Amount in kobo")
    plan_type: PlanType
    billing_cycle: BillingCycle


class PaymentInitiation(BaseModel):
    """Data handed to the gateway checkout widget."""

    reference: str
    public_key: str
    email: str
    amount: int


class PaymentVerificationResult(BaseModel):
    """Backend verdict on a payment reference."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool
    reference: str
    amount: int = 0
    paid_at: Optional[datetime] = Field(default=None, alias="paidAt")
    channel: Optional[str] = None
