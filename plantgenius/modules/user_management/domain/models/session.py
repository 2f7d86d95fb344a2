# 📄 File: plantgenius/modules/user_management/domain/models/session.py
# 🧭 Purpose (Layman Explanation):
# Describes who is signed in on this device and until when their sign-in stays valid.
# 🧪 Purpose (Technical Summary):
# Domain models for the authenticated identity (AuthUser), the client session (AuthSession)
# and the session lifecycle state machine (SessionState).
# 🔗 Dependencies:
# pydantic, datetime, enum
# 🔄 Connected Modules / Calls From:
# AuthService (session creation/persistence), AuthContext (state), identity provider adapters

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthProvider(str, Enum):
    """How the user signed in"""
    EMAIL = "email"
    GOOGLE = "google"
    APPLE = "apple"


class SessionState(str, Enum):
    """
    Session lifecycle.

    UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED -> UNAUTHENTICATED
    """
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthUser(BaseModel):
    """Authenticated identity as persisted on the device."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    auth_provider: AuthProvider = Field(default=AuthProvider.EMAIL, alias="authProvider")


class AuthSession(BaseModel):
    """
    Client session: issued token, identity and expiry.

    Owned by the client process; lifetime bounded by expiry or explicit sign-out.
    """

    token: str
    user: AuthUser
    expires_at: datetime

    @field_validator("expires_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def issue(
        cls,
        token: str,
        user: AuthUser,
        ttl_days: int = 30,
        now: Optional[datetime] = None,
    ) -> "AuthSession":
        """Create a session expiring ttl_days from now."""
        now = now or datetime.now(timezone.utc)
        return cls(token=token, user=user, expires_at=now + timedelta(days=ttl_days))

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now
