# 📄 File: plantgenius/modules/user_management/domain/models/daily_scan.py
# 🧭 Purpose (Layman Explanation):
# Counts how many plant scans a user has done today, so free users get a fixed daily quota.
# 🧪 Purpose (Technical Summary):
# DailyScanCounter keyed by (user, UTC day); a missing record means a count of zero.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# DailyScanRepository, EntitlementService

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DailyScanCounter(BaseModel):
    """Per-day scan counter; reset implicitly by date rollover."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(alias="userId")
    scan_date: str = Field(alias="scanDate", description="YYYY-MM-DD (UTC)")
    scan_count: int = Field(default=0, alias="scanCount")

    @field_validator("scan_count")
    @classmethod
    def non_negative(cls, v: int) -> int:
        return max(0, v)


def remaining_scans(scan_count: int, daily_limit: int) -> int:
    """Free scans left today, floored at zero."""
    return max(0, daily_limit - scan_count)
