"""
Session Cookie

Holds the rotating bearer token between requests. The cookie is kept in
the same key-value storage as the timing state so it survives restarts.
"""

import orjson

from core.logger import get_logger
from state.storage import KeyValueStorage, StorageError

logger = get_logger(__name__)


class SessionCookie:
    """Named cookie storing the bearer token and its secure flag."""

    def __init__(self, storage: KeyValueStorage, name: str = "hanko"):
        self._storage = storage
        self.name = name

    @property
    def _key(self) -> str:
        return f"cookie:{self.name}"

    def get(self) -> str | None:
        """Return the stored token, or None when there is none."""
        try:
            raw = self._storage.get(self._key)
            if not raw:
                return None
            value = orjson.loads(raw).get("value")
        except (StorageError, ValueError, AttributeError) as e:
            logger.warning(f"Cookie {self.name} unreadable: {e}")
            return None
        return value if isinstance(value, str) and value else None

    def is_secure(self) -> bool:
        try:
            raw = self._storage.get(self._key)
            return bool(raw) and bool(orjson.loads(raw).get("secure"))
        except (StorageError, ValueError, AttributeError):
            return False

    def set(self, value: str, secure: bool = False) -> None:
        raw = orjson.dumps({"value": value, "secure": secure}).decode("utf-8")
        try:
            self._storage.set(self._key, raw)
        except StorageError as e:
            logger.warning(f"Cookie {self.name} not saved: {e}")

    def clear(self) -> None:
        try:
            self._storage.delete(self._key)
        except StorageError as e:
            logger.warning(f"Cookie {self.name} not cleared: {e}")
