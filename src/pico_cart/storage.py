import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable
from pico_ioc import factory, provides
from .config import CartSettings

@runtime_checkable
class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...
    async def set(self, key: str, value: str) -> None: ...

class InMemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

class FileKeyValueStore:
    """Key/value strings kept in a single JSON object on disk.

    File access runs in a worker thread; writes go to a temporary file that
    replaces the target, so a crash mid-write leaves the previous contents.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def _set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{self.path}: value under {key!r} is not a string")
        return value

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._set, key, value)

@factory
class StorageFactory:
    """Provides the cart's KeyValueStore from the ``cart.storage_backend`` setting."""

    @provides(KeyValueStore, scope="singleton")
    def create_storage(self, settings: CartSettings) -> KeyValueStore:
        if settings.storage_backend == "file":
            return FileKeyValueStore(settings.storage_path)
        return InMemoryKeyValueStore()
