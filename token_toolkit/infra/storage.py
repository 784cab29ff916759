"""
Durable key-value storage

Settings are kept as serialized strings under a fixed key. The file
backend holds a JSON object and replaces the whole file on every write,
so a reader never sees a half-written record.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from ..errors import StorageError

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """
    Protocol for key-value storage media

    Implementations raise StorageError when the medium is unavailable.
    """

    def get(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is absent"""
        ...

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key"""
        ...


class MemoryStorage:
    """In-process storage; nothing survives the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStorage:
    """
    Storage backed by a single JSON object file

    Usage:
        storage = JsonFileStorage("~/.token_toolkit/storage.json")
        storage.set("kidwiftools.token", '{"mint": ""}')
    """

    def __init__(self, path: str):
        if not path:
            from ..errors import ConfigurationError
            raise ConfigurationError.missing("storage path")
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self, key: str) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError.read_failed(key, e) from e
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} does not hold a JSON object", key=key)
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all(key).get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all(key)
        except StorageError:
            # Unreadable file is replaced rather than blocking the write
            logger.warning(f"Overwriting unreadable storage file {self._path}")
            data = {}
        data[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self._path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError.write_failed(key, e) from e

        logger.debug(f"Wrote '{key}' to {self._path}")


def create_storage(path: Optional[str] = None) -> Optional[KeyValueStorage]:
    """
    Create storage based on configuration

    Args:
        path: JSON file path (defaults to TOKEN_TOOLKIT_STORAGE_PATH)

    Returns:
        JsonFileStorage, or None when persistence is disabled (empty path)
    """
    if path is None:
        from ..config import config as global_config
        path = global_config.storage.path

    if not path:
        logger.info("No storage path configured; settings will not persist")
        return None
    return JsonFileStorage(path)
