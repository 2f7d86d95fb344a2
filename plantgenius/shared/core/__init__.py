# 📄 File: plantgenius/shared/core/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Home of the error types shared by every PlantGenius feature.
#
# 🧪 Purpose (Technical Summary):
# Core package exports for the exception hierarchy.
#
# 🔄 Connected Modules / Calls From:
# - Services, repositories and adapters across all modules

from .exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    PaymentError,
    PlantGeniusException,
    SignInCancelledError,
    ValidationError,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "ExternalServiceError",
    "NotFoundError",
    "PaymentError",
    "PlantGeniusException",
    "SignInCancelledError",
    "ValidationError",
]
