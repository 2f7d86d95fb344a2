# 📄 File: plantgenius/modules/payments/__init__.py
# 🧭 Purpose (Layman Explanation):
# Paying for a PlantGenius plan through Paystack.
# 🧪 Purpose (Technical Summary):
# Payments module: plan price table, payment DTOs and the Paystack relay service.

"""
Payments Module

- Plan pricing (kobo) per tier and billing cycle
- Payment reference generation and checkout data
- Backend-side payment verification
"""
