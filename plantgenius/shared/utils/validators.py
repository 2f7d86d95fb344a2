# 📄 File: plantgenius/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# Small checkers that make sure what the user typed is sensible before we contact any server,
# like verifying an email looks real, a password is strong enough, or a photo path is valid.
# 🧪 Purpose (Technical Summary):
# Input validation returning ValidationResult objects, plus raising helpers that convert
# failures into ValidationError before any network call is made.
# 🔗 Dependencies:
# re, email-validator, plantgenius.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# AuthService (sign-up/sign-in/reset), PaystackService (payer email), AuthContext (profile updates)

import re
from typing import List

from email_validator import EmailNotValidError, validate_email

from plantgenius.shared.core.exceptions import ValidationError

# Password validation patterns
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
PASSWORD_PATTERNS = {
    'uppercase': re.compile(r'[A-Z]'),
    'lowercase': re.compile(r'[a-z]'),
    'digit': re.compile(r'\d'),
}

EMAIL_MAX_LENGTH = 254
IMAGE_URI_PREFIXES = ('file://', 'content://', 'http://', 'https://', 'data:')


class ValidationResult:
    """Result object for validation operations"""
    def __init__(self, is_valid: bool, errors: List[str] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str):
        """Add validation error"""
        self.errors.append(error)
        self.is_valid = False

    def raise_for_errors(self, field: str) -> None:
        """Raise ValidationError with the first error message, if any."""
        if not self.is_valid:
            raise ValidationError(self.errors[0], field=field)


# ==============================================================================
# EMAIL VALIDATION
# ==============================================================================

def validate_email_address(email: str) -> ValidationResult:
    """
    Validate email address format

    Deliverability (DNS) is not checked; the identity provider owns that.

    Args:
        email: Email address to validate

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult(True)

    if not email or not isinstance(email, str):
        result.add_error("Email is required")
        return result

    email = email.strip()

    if len(email) > EMAIL_MAX_LENGTH:
        result.add_error(f"Email is too long (max {EMAIL_MAX_LENGTH} characters)")
        return result

    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        result.add_error("Invalid email format")

    return result


# ==============================================================================
# PASSWORD VALIDATION
# ==============================================================================

def validate_password(password: str) -> ValidationResult:
    """
    Validate password strength

    Args:
        password: Password to validate

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult(True)

    if not password or not isinstance(password, str):
        result.add_error("Password is required")
        return result

    if len(password) < PASSWORD_MIN_LENGTH:
        result.add_error(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    if len(password) > PASSWORD_MAX_LENGTH:
        result.add_error(f"Password must be no more than {PASSWORD_MAX_LENGTH} characters")

    if not all(pattern.search(password) for pattern in PASSWORD_PATTERNS.values()):
        result.add_error("Password must contain uppercase, lowercase, and numbers")

    return result


# ==============================================================================
# URI VALIDATION
# ==============================================================================

def validate_image_uri(uri: str) -> ValidationResult:
    """Check that an image reference uses a scheme the app can load."""
    result = ValidationResult(True)

    if not uri or not isinstance(uri, str):
        result.add_error("Image URI is required")
        return result

    if not uri.startswith(IMAGE_URI_PREFIXES):
        result.add_error("Invalid image URI format")

    return result


# ==============================================================================
# RAISING HELPERS
# ==============================================================================

def ensure_valid_email(email: str) -> str:
    """Return the stripped email or raise ValidationError."""
    validate_email_address(email).raise_for_errors("email")
    return email.strip()


def ensure_valid_password(password: str) -> str:
    validate_password(password).raise_for_errors("password")
    return password


def ensure_valid_image_uri(uri: str) -> str:
    validate_image_uri(uri).raise_for_errors("avatar_url")
    return uri
