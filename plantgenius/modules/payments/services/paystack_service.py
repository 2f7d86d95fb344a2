# 📄 File: plantgenius/modules/payments/services/paystack_service.py
# 🧭 Purpose (Layman Explanation):
# Starts a card payment with Paystack and asks our backend whether a payment really went
# through before anyone gets a paid plan.
# 🧪 Purpose (Technical Summary):
# Payment gateway relay: generates unique references, prepares checkout data for the
# Paystack widget (public key only) and delegates verification to the backend's
# POST /payments/verify, which holds the secret key.
# 🔗 Dependencies:
# - plantgenius.shared.infrastructure.api_client (StoreAPIClient)
# - plantgenius.shared.config.settings (PAYSTACK_PUBLIC_KEY)
# - plantgenius.shared.utils.validators (email validation)
# 🔄 Connected Modules / Calls From:
# - SubscriptionService.activate_after_payment, checkout screens

import secrets
import time
from typing import Optional

from plantgenius.modules.payments.domain.models import (
    PLAN_PRICES,
    PaymentInitiation,
    PaymentInitiationData,
    PaymentVerificationResult,
)
from plantgenius.modules.user_management.domain.models.subscription import BillingCycle, PlanType
from plantgenius.shared.config.settings import Settings, get_settings
from plantgenius.shared.core.exceptions import PaymentError, PlantGeniusException, ValidationError
from plantgenius.shared.infrastructure.api_client import StoreAPIClient
from plantgenius.shared.utils.logging import get_logger
from plantgenius.shared.utils.validators import ensure_valid_email

logger = get_logger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(length: int) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


class PaystackService:
    """
    Paystack payment relay.

    Verification is never decided on the client; it always goes through the backend.
    """

    def __init__(self, api: StoreAPIClient, settings: Optional[Settings] = None):
        self._api = api
        self.settings = settings or get_settings()
        self.public_key = self.settings.PAYSTACK_PUBLIC_KEY

        if not self.public_key:
            logger.warning("Paystack public key not configured")

    @staticmethod
    def generate_reference() -> str:
        """Unique payment reference: PAY_{epoch_ms}_{base36 suffix}."""
        return f"PAY_{int(time.time() * 1000)}_{_base36(13)}"

    def is_configured(self) -> bool:
        return self.settings.paystack_configured

    @staticmethod
    def amount_for(plan: PlanType, cycle: BillingCycle) -> int:
        """Price of a plan in kobo."""
        return PLAN_PRICES[(PlanType(plan), BillingCycle(cycle))]

    def initiate_payment(self, data: PaymentInitiationData) -> PaymentInitiation:
        """
        Prepare checkout data for the gateway widget.

        Raises:
            PaymentError: the gateway key is missing or a placeholder
            ValidationError: the email is invalid or the amount is not the plan price
        """
        if not self.is_configured():
            logger.error("Payment attempted without a configured gateway key", email=data.email)
            raise PaymentError("Payment service not configured. Please contact support.")

        email = ensure_valid_email(data.email)
        expected = self.amount_for(data.plan_type, data.billing_cycle)
        if data.amount != expected:
            logger.warning("Checkout amount does not match plan price", amount=data.amount, expected=expected)
            raise ValidationError("Amount does not match the selected plan", field="amount")

        reference = self.generate_reference()

        logger.info(
            "Payment initiated",
            reference=reference,
            email=email,
            amount=data.amount,
            plan_type=PlanType(data.plan_type).value,
            billing_cycle=BillingCycle(data.billing_cycle).value,
        )
        return PaymentInitiation(
            reference=reference,
            public_key=self.public_key,
            email=email,
            amount=data.amount,
        )

    async def verify_payment(self, reference: str) -> PaymentVerificationResult:
        """
        Ask the backend to verify a reference with the gateway.

        Raises:
            ValidationError: empty reference
            PaymentError: the backend could not be reached or rejected the request
        """
        if not reference:
            raise ValidationError("Payment reference is required", field="reference")

        logger.info("Verifying payment", reference=reference)
        try:
            data = await self._api.post("/payments/verify", {"reference": reference})
        except PlantGeniusException as e:
            logger.error("Error verifying payment", reference=reference, error=e.message)
            raise PaymentError("Payment verification failed", reference=reference) from e

        if not isinstance(data, dict):
            raise PaymentError("Payment verification failed", reference=reference)

        data.setdefault("reference", reference)
        result = PaymentVerificationResult.model_validate(data)
        logger.info(
            "Payment verification completed",
            reference=reference,
            success=result.success,
            amount=result.amount,
            channel=result.channel,
        )
        return result
