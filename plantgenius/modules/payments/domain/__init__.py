# 📄 File: plantgenius/modules/payments/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# Plan prices and payment record shapes.
# 🧪 Purpose (Technical Summary):
# Payment domain exports.

from .models import PLAN_PRICES, PaymentInitiation, PaymentInitiationData, PaymentVerificationResult

__all__ = [
    "PLAN_PRICES",
    "PaymentInitiation",
    "PaymentInitiationData",
    "PaymentVerificationResult",
]
