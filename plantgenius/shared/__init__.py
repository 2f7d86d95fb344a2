# 📄 File: plantgenius/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as the toolbox every part of PlantGenius uses:
# settings, error types, logging, input checks and the backend connection.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, exceptions, utilities and infrastructure
# used by the user_management and payments modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - plantgenius.modules.*

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Exception hierarchy
- Structured logging and input validation
- REST store client and local key-value storage
"""

__all__ = []
