# 📄 File: plantgenius/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the settings that tell PlantGenius where its backend and sign-in service live.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exports for settings management.
#
# 🔗 Dependencies:
# - settings.py (application settings)
# - supabase.py (identity provider client, imported directly where needed)
#
# 🔄 Connected Modules / Calls From:
# - All modules requiring configuration

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
