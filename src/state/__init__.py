"""
State Package

Local persistence for timing hints and credential correlation.
"""

from .storage import FileStorage, KeyValueStorage, MemoryStorage, StorageError, create_storage
from .timing_store import TimingStore, UserState

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
    "StorageError",
    "create_storage",
    "TimingStore",
    "UserState",
]
