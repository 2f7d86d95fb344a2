# 📄 File: plantgenius/modules/user_management/domain/repositories/profile_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what we can do with user profiles (look one up, create one, change one),
# without caring where profiles are actually stored.
# 🧪 Purpose (Technical Summary):
# Abstract repository interface for Profile records in the document store.
# 🔗 Dependencies:
# abc, Profile domain model
# 🔄 Connected Modules / Calls From:
# EntitlementService, AuthService, OAuth sign-in providers, AuthContext
# Repository Implementation (plantgenius.modules.user_management.infrastructure.store)

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from plantgenius.modules.user_management.domain.models.profile import Profile, ProfileDraft


class ProfileRepository(ABC):
    """Abstract repository interface for profile data access operations."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        """Get profile by user ID; None when no record exists."""
        pass

    @abstractmethod
    async def create(self, draft: ProfileDraft) -> Profile:
        """Create a new profile."""
        pass

    @abstractmethod
    async def update(self, user_id: str, updates: Dict[str, Any]) -> Profile:
        """Apply a partial update and return the stored profile."""
        pass
