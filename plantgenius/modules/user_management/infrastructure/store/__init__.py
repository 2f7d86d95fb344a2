# 📄 File: plantgenius/modules/user_management/infrastructure/store/__init__.py
# 🧭 Purpose (Layman Explanation):
# Reads and writes user records on the PlantGenius backend.
# 🧪 Purpose (Technical Summary):
# REST implementations of the profile, subscription and daily-scan repositories.

from .profile_repository_impl import ProfileRepositoryImpl
from .scan_repository_impl import DailyScanRepositoryImpl
from .subscription_repository_impl import SubscriptionRepositoryImpl

__all__ = [
    "ProfileRepositoryImpl",
    "DailyScanRepositoryImpl",
    "SubscriptionRepositoryImpl",
]
