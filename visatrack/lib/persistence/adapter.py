"""
adapter.py - Load/save/remove contract for tracker snapshots

    load(key, seed)    -> persisted steps, or `seed` when nothing usable is stored
    save(key, steps)   -> full replace of the snapshot; failures logged, never raised
    remove(key)        -> drop the snapshot (whole-tracker discard only)

Storage failures never reach the mutation path: a failed read falls back to
the seed, a failed write leaves the in-memory state authoritative. Invalid
storage keys are caller errors and do raise.

Usage:
    from visatrack.lib.persistence import PersistenceAdapter, MemoryStorage

    adapter = PersistenceAdapter(MemoryStorage())
    steps = adapter.load("nz-student-visa-tracker", student_visa_steps())
    adapter.save("nz-student-visa-tracker", steps)
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Sequence, TypeVar

from pydantic import ValidationError

from visatrack.models import VisaStep
from .snapshot import dump_steps, load_steps
from .storage import SnapshotStorage, validate_storage_key

log = logging.getLogger(__name__)

T = TypeVar("T")


class PersistenceAdapter:
    """Maps storage keys to snapshots in a SnapshotStorage"""

    def __init__(self, storage: SnapshotStorage):
        self.storage = storage

    def load(self, key: str, seed: Sequence[VisaStep]) -> Sequence[VisaStep]:
        """
        Load the snapshot stored under `key`.

        Returns `seed` itself (not a copy) when no snapshot exists or the
        stored one cannot be read, decoded or validated.
        """
        return self.load_value(key, load_steps, seed)

    def save(self, key: str, steps: Sequence[VisaStep]) -> bool:
        """
        Write the full step sequence under `key`.

        Returns:
            True if the write went through, False if storage failed
        """
        return self.save_value(key, dump_steps(steps))

    def remove(self, key: str) -> bool:
        """
        Delete the snapshot under `key`. Missing snapshots are fine.

        Returns:
            True if storage accepted the delete
        """
        validate_storage_key(key)
        try:
            self.storage.delete(key)
        except Exception as e:
            log.warning("could not remove snapshot key=%s: %s", key, e, exc_info=True)
            return False
        log.info("removed snapshot key=%s", key)
        return True

    def load_value(self, key: str, parse: Callable[[str], T], default: T) -> T:
        """Read text under `key` and parse it, falling back to `default`."""
        validate_storage_key(key)
        try:
            text = self.storage.read(key)
        except Exception as e:
            log.warning("could not read snapshot key=%s, using defaults: %s", key, e)
            return default

        if text is None:
            log.debug("no snapshot key=%s, using defaults", key)
            return default

        try:
            return parse(text)
        except json.JSONDecodeError as e:
            log.warning("invalid JSON in snapshot key=%s, using defaults: %s", key, e)
        except (ValidationError, ValueError, TypeError) as e:
            log.warning("snapshot key=%s does not match schema, using defaults: %s", key, e)
        return default

    def save_value(self, key: str, text: str) -> bool:
        """Replace the text under `key`; storage errors are logged, not raised."""
        validate_storage_key(key)
        try:
            self.storage.write(key, text)
        except Exception as e:
            log.warning("could not save snapshot key=%s, keeping in-memory state: %s", key, e)
            return False
        log.debug("saved snapshot key=%s bytes=%d", key, len(text))
        return True
