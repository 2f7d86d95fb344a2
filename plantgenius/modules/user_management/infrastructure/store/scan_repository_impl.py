# 📄 File: plantgenius/modules/user_management/infrastructure/store/scan_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and bumps the "scans done today" counter on the backend.
# 🧪 Purpose (Technical Summary):
# Concrete DailyScanRepository: GET /scans/{userId}/{date} and
# POST /scans/{userId}/{date}/increment (server-side upsert, $inc by one).
# 🔗 Dependencies:
# - plantgenius.shared.infrastructure.api_client (StoreAPIClient)
# 🔄 Connected Modules / Calls From:
# - EntitlementService

from typing import Optional
from urllib.parse import quote

from plantgenius.modules.user_management.domain.models.daily_scan import DailyScanCounter
from plantgenius.modules.user_management.domain.repositories.scan_repository import DailyScanRepository
from plantgenius.shared.core.exceptions import APIError, NotFoundError
from plantgenius.shared.infrastructure.api_client import StoreAPIClient


class DailyScanRepositoryImpl(DailyScanRepository):
    """REST implementation of the DailyScanRepository interface."""

    def __init__(self, api: StoreAPIClient):
        self._api = api

    @staticmethod
    def _path(user_id: str, scan_date: str) -> str:
        return f"/scans/{quote(user_id, safe='')}/{quote(scan_date, safe='')}"

    async def get(self, user_id: str, scan_date: str) -> Optional[DailyScanCounter]:
        try:
            data = await self._api.get(self._path(user_id, scan_date))
        except NotFoundError:
            return None
        if not data:
            return None
        return DailyScanCounter.model_validate(data)

    async def increment(self, user_id: str, scan_date: str) -> DailyScanCounter:
        data = await self._api.post(f"{self._path(user_id, scan_date)}/increment")
        if not data:
            # Some backend builds answer the upsert with an empty body.
            counter = await self.get(user_id, scan_date)
            if counter is None:
                raise APIError(
                    "Scan increment returned no counter",
                    status_code=502,
                    endpoint=self._path(user_id, scan_date),
                )
            return counter
        data.setdefault("userId", user_id)
        data.setdefault("scanDate", scan_date)
        return DailyScanCounter.model_validate(data)
