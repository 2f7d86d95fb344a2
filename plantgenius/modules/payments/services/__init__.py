# 📄 File: plantgenius/modules/payments/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# The service that starts and checks Paystack payments.
# 🧪 Purpose (Technical Summary):
# Payment service exports.

from .paystack_service import PaystackService

__all__ = ["PaystackService"]
