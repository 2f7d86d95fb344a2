# 📄 File: plantgenius/modules/user_management/domain/repositories/scan_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how we read and bump the "scans done today" counter.
# 🧪 Purpose (Technical Summary):
# Abstract repository interface for DailyScanCounter records keyed by (user, date).
# 🔗 Dependencies:
# abc, DailyScanCounter domain model
# 🔄 Connected Modules / Calls From:
# EntitlementService

from abc import ABC, abstractmethod
from typing import Optional

from plantgenius.modules.user_management.domain.models.daily_scan import DailyScanCounter


class DailyScanRepository(ABC):
    """Abstract repository interface for daily scan counters."""

    @abstractmethod
    async def get(self, user_id: str, scan_date: str) -> Optional[DailyScanCounter]:
        """Counter for the given day; None when no scans were recorded."""
        pass

    @abstractmethod
    async def increment(self, user_id: str, scan_date: str) -> DailyScanCounter:
        """
        Add one scan to the given day.

        Creates the counter with a count of 1 when none exists.
        """
        pass
