# 📄 File: plantgenius/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The configuration center that reads the app's settings (backend address, Supabase keys,
# Paystack key, daily scan limit) from environment variables and hands them to everything else.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for the client data/auth layer.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
#
# 🔄 Connected Modules / Calls From:
# - plantgenius.shared.config.supabase (identity provider client)
# - plantgenius.shared.infrastructure.api_client (REST store client)
# - plantgenius.modules.payments.services.paystack_service
# - plantgenius.modules.user_management (entitlements, OAuth providers)

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PLACEHOLDER_MARKER = "placeholder"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="PlantGenius", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json/text)")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # BACKEND (PROFILE / SUBSCRIPTION / SCAN STORE)
    # =========================================================================

    API_BASE_URL: str = Field(
        default="http://localhost:3000/api",
        description="REST backend base URL"
    )
    API_TIMEOUT: float = Field(default=30.0, description="Backend request timeout (seconds)")
    API_MAX_RETRIES: int = Field(default=3, description="Retries on transport failures")

    # =========================================================================
    # SUPABASE (IDENTITY PROVIDER)
    # =========================================================================

    SUPABASE_URL: str = Field(default="", description="Supabase project URL")
    SUPABASE_ANON_KEY: str = Field(default="", description="Supabase anonymous key")

    # =========================================================================
    # PAYMENT GATEWAY
    # =========================================================================

    PAYSTACK_PUBLIC_KEY: str = Field(default="", description="Paystack public key")

    # =========================================================================
    # ENTITLEMENTS & SESSION
    # =========================================================================

    DAILY_SCAN_LIMIT: int = Field(default=5, description="Free scans per calendar day")
    SESSION_TTL_DAYS: int = Field(default=30, description="Session lifetime when provider omits expiry")
    STORAGE_PATH: str = Field(
        default=".plantgenius/storage.json",
        description="Local key-value storage file"
    )

    # =========================================================================
    # OAUTH
    # =========================================================================

    PLATFORM: str = Field(default="ios", description="Client platform (ios/android/web)")
    GOOGLE_IOS_CLIENT_ID: Optional[str] = Field(None, description="Google iOS client ID")
    GOOGLE_ANDROID_CLIENT_ID: Optional[str] = Field(None, description="Google Android client ID")
    GOOGLE_WEB_CLIENT_ID: Optional[str] = Field(None, description="Google web client ID")
    OAUTH_REDIRECT_URI: str = Field(
        default="myapp://redirect",
        description="Redirect URI registered with the OAuth providers"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("PLATFORM")
    @classmethod
    def validate_platform(cls, v: str) -> str:
        allowed_platforms = ["ios", "android", "web"]
        if v.lower() not in allowed_platforms:
            raise ValueError(f"Platform must be one of {allowed_platforms}")
        return v.lower()

    @field_validator("DAILY_SCAN_LIMIT", "SESSION_TTL_DAYS")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Value must not be negative")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def google_client_id(self) -> Optional[str]:
        """Google OAuth client ID for the configured platform."""
        return {
            "ios": self.GOOGLE_IOS_CLIENT_ID,
            "android": self.GOOGLE_ANDROID_CLIENT_ID,
        }.get(self.PLATFORM, self.GOOGLE_WEB_CLIENT_ID)

    @property
    def paystack_configured(self) -> bool:
        """True when a real (non-placeholder) Paystack key is set."""
        key = self.PAYSTACK_PUBLIC_KEY
        return bool(key) and PLACEHOLDER_MARKER not in key.lower()


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
