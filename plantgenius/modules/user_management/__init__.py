# 📄 File: plantgenius/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about a PlantGenius user: signing in, their profile, their paid plan and
# how many free scans they have left today.
# 🧪 Purpose (Technical Summary):
# User management module following the domain / application / infrastructure split:
# session lifecycle, profile store access, subscription and daily-scan entitlements.
# 🔗 Dependencies:
# pydantic, httpx, supabase, plantgenius.shared
# 🔄 Connected Modules / Calls From:
# Host application via application.dependencies.create_auth_context

"""
User Management Module

- Authentication (email/password, Google, Apple) and session persistence
- Profile management
- Subscription and daily scan entitlements

Architecture:
- Domain: models, repository interfaces, services
- Application: AuthContext and wiring
- Infrastructure: REST store repositories, Supabase and OAuth adapters
"""

__version__ = "1.0.0"
