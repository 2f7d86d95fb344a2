# 📄 File: plantgenius/shared/infrastructure/storage/local_storage.py
# 🧭 Purpose (Layman Explanation):
# A tiny on-device notebook where the app remembers who is signed in between launches.
# 🧪 Purpose (Technical Summary):
# Async key-value storage abstraction with a JSON-file backend (blocking file I/O pushed
# to a worker thread) and an in-memory backend for tests and ephemeral sessions.
# 🔗 Dependencies:
# asyncio, json, pathlib
# 🔄 Connected Modules / Calls From:
# AuthService (session persistence and restoration)

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)


class KeyValueStorage(ABC):
    """Persistent string key-value storage."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        pass


class InMemoryStorage(KeyValueStorage):
    """Process-local storage; contents are lost on exit."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._items)


class JSONFileStorage(KeyValueStorage):
    """
    Storage backed by a single JSON object on disk.

    The whole file is rewritten on every mutation; the store only ever
    holds a couple of small session keys.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def get_item(self, key: str) -> Optional[str]:
        items = await asyncio.to_thread(self._read)
        return items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            items = await asyncio.to_thread(self._read)
            items[key] = value
            await asyncio.to_thread(self._write, items)

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            items = await asyncio.to_thread(self._read)
            if items.pop(key, None) is not None:
                await asyncio.to_thread(self._write, items)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Local storage unreadable, starting empty", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(items), encoding="utf-8")
        tmp_path.replace(self.path)
