# 📄 File: plantgenius/modules/user_management/infrastructure/store/profile_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Fetches, creates and edits user profiles on the PlantGenius backend.
# 🧪 Purpose (Technical Summary):
# Concrete ProfileRepository over the REST store (GET/PATCH /users/{id}, POST /users),
# mapping camelCase documents to Profile domain models.
# 🔗 Dependencies:
# - plantgenius.shared.infrastructure.api_client (StoreAPIClient)
# - plantgenius.modules.user_management.domain.models.profile
# 🔄 Connected Modules / Calls From:
# - AuthService, EntitlementService, AuthContext, OAuth sign-in providers

"""
Profile Repository Implementation

Maps between Profile domain entities and the backend's user documents.
A 404 from the backend means "no profile" and is returned as None;
every other failure propagates to the caller.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from plantgenius.modules.user_management.domain.models.profile import Profile, ProfileDraft
from plantgenius.modules.user_management.domain.repositories.profile_repository import ProfileRepository
from plantgenius.shared.core.exceptions import NotFoundError
from plantgenius.shared.infrastructure.api_client import StoreAPIClient
from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)

# Domain field name -> backend document field
_UPDATABLE_FIELDS = {
    "email": "email",
    "full_name": "fullName",
    "avatar_url": "avatarUrl",
}


class ProfileRepositoryImpl(ProfileRepository):
    """REST implementation of the ProfileRepository interface."""

    def __init__(self, api: StoreAPIClient):
        self._api = api

    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        try:
            data = await self._api.get(f"/users/{quote(user_id, safe='')}")
        except NotFoundError:
            logger.debug("Profile not found", user_id=user_id)
            return None

        if not data:
            return None
        return Profile.model_validate(data)

    async def create(self, draft: ProfileDraft) -> Profile:
        data = await self._api.post("/users", draft.to_payload())
        profile = Profile.model_validate(data)
        logger.info("Created profile", user_id=profile.id, auth_provider=profile.auth_provider)
        return profile

    async def update(self, user_id: str, updates: Dict[str, Any]) -> Profile:
        payload = {
            _UPDATABLE_FIELDS[key]: value
            for key, value in updates.items()
            if key in _UPDATABLE_FIELDS
        }
        data = await self._api.patch(f"/users/{quote(user_id, safe='')}", payload)
        logger.info("Updated profile", user_id=user_id, fields=sorted(payload))
        return Profile.model_validate(data)
