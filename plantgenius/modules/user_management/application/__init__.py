# 📄 File: plantgenius/modules/user_management/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# What the screens talk to: the signed-in user's live state and the sign-in buttons.
# 🧪 Purpose (Technical Summary):
# Application layer exports. Wiring lives in application.dependencies.

from .auth_context import AuthContext

__all__ = ["AuthContext"]
