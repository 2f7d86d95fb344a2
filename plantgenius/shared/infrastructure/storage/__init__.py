# 📄 File: plantgenius/shared/infrastructure/storage/__init__.py
# 🧭 Purpose (Layman Explanation):
# Where the app keeps small things on the device, like who is signed in.
# 🧪 Purpose (Technical Summary):
# Local key-value storage exports.

from .local_storage import InMemoryStorage, JSONFileStorage, KeyValueStorage

__all__ = ["InMemoryStorage", "JSONFileStorage", "KeyValueStorage"]
