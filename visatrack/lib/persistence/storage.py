"""
storage.py - Key/value slots for tracker snapshots

SnapshotStorage is the port the adapter writes through. Two backends:

- MemoryStorage: dict-backed (tests, throwaway sessions)
- JsonFileStorage: one {key}.json per storage key in a data directory

Keys must match STORAGE_KEY_RE so each key maps to exactly one file.

Usage:
    from visatrack.lib.persistence import JsonFileStorage

    storage = JsonFileStorage(Path("data/trackers"))
    storage.write("nz-student-visa-tracker", "[]")
    storage.read("nz-student-visa-tracker")  # => "[]"
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Optional, Protocol

from visatrack.lib.errors import InvalidStorageKeyError

STORAGE_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,199}$")


def validate_storage_key(key: str) -> str:
    """Return `key` unchanged or raise InvalidStorageKeyError."""
    if not isinstance(key, str) or not STORAGE_KEY_RE.match(key):
        raise InvalidStorageKeyError(key)
    return key


class SnapshotStorage(Protocol):
    """Durable key/value slots holding snapshot text"""

    def read(self, key: str) -> Optional[str]:
        """Return stored text, or None if nothing is stored under key."""
        ...

    def write(self, key: str, data: str) -> None:
        """Replace whatever is stored under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key; missing keys are ignored."""
        ...


class MemoryStorage:
    """In-memory SnapshotStorage"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.slots.get(validate_storage_key(key))

    def write(self, key: str, data: str) -> None:
        self.slots[validate_storage_key(key)] = data

    def delete(self, key: str) -> None:
        self.slots.pop(validate_storage_key(key), None)

    def keys(self) -> list[str]:
        return sorted(self.slots)


class JsonFileStorage:
    """
    File-backed SnapshotStorage: {data_dir}/{key}.json

    Writes go to a temp file first and are moved into place with
    os.replace, so a failed write never leaves a half-written snapshot.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{validate_storage_key(key)}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, key: str, data: str) -> None:
        path = self.path_for(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.data_dir.exists():
            return []
        return sorted(p.stem for p in self.data_dir.glob("*.json"))
