"""Shared kernel: validators, local storage, settings, logging and exceptions."""

import json
import logging

import pytest

from plantgenius.modules.user_management.domain.models import AuthError
from plantgenius.shared.config.settings import Settings
from plantgenius.shared.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PaymentError,
    SignInCancelledError,
    ValidationError,
)
from plantgenius.shared.infrastructure.storage import InMemoryStorage, JSONFileStorage
from plantgenius.shared.utils.logging import JSONFormatter, get_logger, log_context
from plantgenius.shared.utils.validators import (
    ensure_valid_email,
    validate_email_address,
    validate_image_uri,
    validate_password,
)


# ----------------------------------------------------------------------------
# Validators
# ----------------------------------------------------------------------------

@pytest.mark.parametrize("email", ["grower@plantgenius.app", "  ada.fern+ficus@plantgenius.app "])
def test_valid_emails(email):
    assert validate_email_address(email).is_valid


@pytest.mark.parametrize("email, message", [("", "Email is required"), ("grower@", "Invalid email format")])
def test_invalid_emails(email, message):
    result = validate_email_address(email)
    assert not result.is_valid
    assert result.errors == [message]


def test_ensure_valid_email_strips_and_raises():
    assert ensure_valid_email(" grower@plantgenius.app ") == "grower@plantgenius.app"
    with pytest.raises(ValidationError) as exc_info:
        ensure_valid_email("nope")
    assert exc_info.value.field == "email"


@pytest.mark.parametrize("password, valid", [("Monstera123", True), ("monstera123", False), ("Mon1", False), ("", False)])
def test_password_strength(password, valid):
    assert validate_password(password).is_valid is valid


def test_image_uri_schemes():
    assert validate_image_uri("file:///var/mobile/leaf.jpg").is_valid
    assert validate_image_uri("data:image/png;base64,AAAA").is_valid
    assert not validate_image_uri("ftp://leaf.jpg").is_valid


# ----------------------------------------------------------------------------
# Local storage
# ----------------------------------------------------------------------------

async def test_in_memory_storage_roundtrip():
    storage = InMemoryStorage({"a": "1"})
    await storage.set_item("b", "2")
    await storage.remove_item("a")

    assert await storage.get_item("a") is None
    assert storage.snapshot() == {"b": "2"}


async def test_json_file_storage_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    await JSONFileStorage(str(path)).set_item("@plantgenius_auth_token", '{"token": "t"}')

    reopened = JSONFileStorage(str(path))
    assert await reopened.get_item("@plantgenius_auth_token") == '{"token": "t"}'

    await reopened.remove_item("@plantgenius_auth_token")
    assert json.loads(path.read_text()) == {}


async def test_json_file_storage_tolerates_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{broken")

    assert await JSONFileStorage(str(path)).get_item("anything") is None


# ----------------------------------------------------------------------------
# Settings
# ----------------------------------------------------------------------------

def test_settings_defaults():
    settings = Settings()
    assert settings.DAILY_SCAN_LIMIT == 5
    assert settings.SESSION_TTL_DAYS == 30


def test_settings_reject_unknown_platform():
    with pytest.raises(ValueError):
        Settings(PLATFORM="symbian")


def test_google_client_id_per_platform():
    settings = Settings(PLATFORM="web", GOOGLE_WEB_CLIENT_ID="web-id", GOOGLE_IOS_CLIENT_ID="ios-id")
    assert settings.google_client_id == "web-id"


def test_paystack_placeholder_detection():
    assert Settings(PAYSTACK_PUBLIC_KEY="pk_live_abc").paystack_configured
    assert not Settings(PAYSTACK_PUBLIC_KEY="pk_test_placeholder").paystack_configured


# ----------------------------------------------------------------------------
# Logging
# ----------------------------------------------------------------------------

def test_json_formatter_flattens_structured_fields():
    logger = get_logger("plantgenius.tests")
    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Capture()
    logger.logger.addHandler(handler)
    logger.logger.setLevel(logging.INFO)
    try:
        with log_context(user_id="user-123", operation_id="op-1"):
            logger.info("Daily scan recorded", scan_count=2)
            payload = json.loads(JSONFormatter("%(message)s").format(records[0]))
    finally:
        logger.logger.removeHandler(handler)

    assert payload["message"] == "Daily scan recorded"
    assert payload["scan_count"] == 2
    assert payload["user_id"] == "user-123"
    assert payload["operation_id"] == "op-1"


# ----------------------------------------------------------------------------
# Exceptions
# ----------------------------------------------------------------------------

def test_exception_to_dict():
    error = PaymentError("Payment verification failed", reference="PAY_1_abc")
    assert error.to_dict()["error"]["details"] == {"reference": "PAY_1_abc"}
    assert NotFoundError().status_code == 404


@pytest.mark.parametrize(
    "exc, code",
    [
        (ValidationError("Invalid email format", field="email"), "VALIDATION_ERROR"),
        (SignInCancelledError("google"), "CANCELLED"),
        (AuthenticationError("Token rejected"), "GOOGLE_SIGN_IN_FAILED"),
        (RuntimeError("boom"), "GOOGLE_SIGN_IN_FAILED"),
    ],
)
def test_auth_error_normalization(exc, code):
    assert AuthError.from_exception(exc, "GOOGLE_SIGN_IN_FAILED").code == code
