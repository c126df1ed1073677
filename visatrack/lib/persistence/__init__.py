"""Snapshot persistence: storage backends and the load/save/remove adapter"""

from .storage import SnapshotStorage, MemoryStorage, JsonFileStorage, validate_storage_key
from .snapshot import dump_steps, parse_steps
from .adapter import PersistenceAdapter

__all__ = [
    "SnapshotStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "validate_storage_key",
    "dump_steps",
    "parse_steps",
    "PersistenceAdapter",
]
