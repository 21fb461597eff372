"""
Key-Value Persistence

Storage port used by the timing store and the session cookie.
Implementations hold string values under string keys and raise
StorageError when the medium cannot be read or written.
"""

from abc import ABC, abstractmethod
from pathlib import Path

import orjson

from core.logger import get_logger
from core.settings import Settings

logger = get_logger(__name__)


class StorageError(Exception):
    """The storage medium is unavailable or unreadable."""


class KeyValueStorage(ABC):
    """Abstract key-value storage."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        pass


class MemoryStorage(KeyValueStorage):
    """Process-local storage. Nothing survives a restart."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(KeyValueStorage):
    """
    Storage backed by a single JSON document on disk.

    The whole document is read on every access and rewritten on every
    mutation; there is no locking between processes. Reads of an
    unreadable document raise StorageError, writes replace it.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = orjson.loads(self.path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected document in {self.path}")
        return data

    def _load_for_write(self) -> tuple[dict[str, str], bool]:
        """Load the document, starting over when it is unreadable."""
        try:
            return self._load(), False
        except StorageError as e:
            logger.warning(f"Overwriting unreadable storage: {e}")
            return {}, True

    def _dump(self, data: dict[str, str]) -> None:
        # Write a sibling file and swap it in so a crash never leaves half a document
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(orjson.dumps(data))
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data, _ = self._load_for_write()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data, reset = self._load_for_write()
        if data.pop(key, None) is not None or reset:
            self._dump(data)


def create_storage(settings: Settings) -> KeyValueStorage:
    """
    Create the storage configured in settings.

    Args:
        settings: Client settings

    Returns:
        FileStorage when hanko_state_file is set, MemoryStorage otherwise
    """
    if settings.hanko_state_file:
        logger.debug(f"Using file storage at {settings.hanko_state_file}")
        return FileStorage(settings.hanko_state_file)
    return MemoryStorage()
