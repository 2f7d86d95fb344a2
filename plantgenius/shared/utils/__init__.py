# 📄 File: plantgenius/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Small helpers used everywhere: writing log messages and checking what users type in.

# 🧪 Purpose (Technical Summary):
# Utilities package: structured logging setup and input validators.

# 🔄 Connected Modules / Calls From:
# Used by: all services, adapters and repositories

from .logging import get_logger, log_context, setup_logging

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
]
