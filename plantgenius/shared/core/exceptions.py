# 📄 File: plantgenius/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types PlantGenius uses to say what went wrong
# (bad input, failed login, failed payment, backend trouble) in a clear, organized way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing error codes, HTTP-style status codes and
# details, with dictionary serialization for the result variants returned to the UI.
# 🔗 Dependencies:
# httpx status code constants, typing
# 🔄 Connected Modules / Calls From:
# Validators, REST store client, identity provider adapter, auth/payment services

from typing import Any, Dict, Optional

from httpx import codes


class PlantGeniusException(Exception):
    """
    Base exception class for the PlantGenius client layer.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = codes.INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = int(status_code)
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationError(PlantGeniusException):
    """
    Exception raised for authentication failures.
    Used when credentials are rejected or a provider flow fails.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "AUTHENTICATION_ERROR"
    ):
        if not details:
            details = {}
        if provider:
            details["provider"] = provider

        super().__init__(
            message=message,
            status_code=codes.UNAUTHORIZED,
            details=details,
            error_code=error_code
        )


class SignInCancelledError(AuthenticationError):
    """Raised when the user abandons a federated sign-in flow."""

    def __init__(self, provider: Optional[str] = None):
        super().__init__(
            message="Sign in cancelled",
            provider=provider,
            error_code="CANCELLED"
        )


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class ValidationError(PlantGeniusException):
    """
    Exception raised for data validation failures.
    Raised before any network call is made.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if field:
            details["field"] = field
        self.field = field

        super().__init__(
            message=message,
            status_code=codes.UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class ConfigurationError(PlantGeniusException):
    """Raised when a required setting is missing or still a placeholder."""

    def __init__(self, message: str, setting: Optional[str] = None):
        details = {"setting": setting} if setting else {}
        super().__init__(
            message=message,
            status_code=codes.INTERNAL_SERVER_ERROR,
            details=details,
            error_code="CONFIGURATION_ERROR"
        )


# =============================================================================
# PAYMENT EXCEPTIONS
# =============================================================================

class PaymentError(PlantGeniusException):
    """
    Exception raised for payment initiation and verification failures.
    Carries the payment reference when one is known.
    """

    def __init__(
        self,
        message: str = "Payment failed",
        reference: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if reference:
            details["reference"] = reference
        self.reference = reference

        super().__init__(
            message=message,
            status_code=codes.PAYMENT_REQUIRED,
            details=details,
            error_code="PAYMENT_ERROR"
        )


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(PlantGeniusException):
    """
    Exception raised when external service calls fail.
    Used for the identity provider, OAuth endpoints and transport failures.
    """

    def __init__(
        self,
        message: str = "External service error",
        service: Optional[str] = None,
        status_code: int = codes.BAD_GATEWAY,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "EXTERNAL_SERVICE_ERROR"
    ):
        if not details:
            details = {}
        if service:
            details["service"] = service

        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code=error_code
        )


class APIError(ExternalServiceError):
    """
    Non-2xx response from the PlantGenius backend.
    The message is taken from the response body when available.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if endpoint:
            details["endpoint"] = endpoint

        super().__init__(
            message=message,
            service="plantgenius-api",
            status_code=status_code,
            details=details,
            error_code="API_ERROR"
        )


class NotFoundError(APIError):
    """The requested record does not exist ("no rows found")."""

    def __init__(self, message: str = "Resource not found", endpoint: Optional[str] = None):
        super().__init__(message=message, status_code=codes.NOT_FOUND, endpoint=endpoint)
        self.error_code = "NOT_FOUND"
