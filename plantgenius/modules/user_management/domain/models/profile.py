# 📄 File: plantgenius/modules/user_management/domain/models/profile.py
# 🧭 Purpose (Layman Explanation):
# The user's public details we keep on the backend: email, display name and picture.
# 🧪 Purpose (Technical Summary):
# Profile domain model mapped to the backend's camelCase document shape (Mongo `_id`).
# 🔗 Dependencies:
# pydantic, datetime
# 🔄 Connected Modules / Calls From:
# ProfileRepository, EntitlementService, AuthContext, OAuth sign-in providers

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .session import AuthProvider, AuthUser


class Profile(BaseModel):
    """
    Profile domain model.

    One per user; upserted on first sign-in via a federated provider.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, extra="ignore")

    id: str = Field(alias="_id")
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    auth_provider: AuthProvider = Field(default=AuthProvider.EMAIL, alias="authProvider")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    def to_auth_user(self) -> AuthUser:
        """Identity view of this profile for session storage."""
        return AuthUser(
            id=self.id,
            email=self.email,
            full_name=self.full_name,
            avatar_url=self.avatar_url,
            auth_provider=self.auth_provider,
        )


class ProfileDraft(BaseModel):
    """Fields sent when creating a profile; the backend assigns `_id` unless given."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(default=None, alias="_id")
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    auth_provider: AuthProvider = Field(default=AuthProvider.EMAIL, alias="authProvider")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
