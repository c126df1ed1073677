"""
tracker.py - One persisted tracker instance

A Tracker binds a storage key, a seed sequence and a PersistenceAdapter:

1. On activation the snapshot under the key is loaded; if there is none
   (or it is unusable) the seed is used. The activated state is written
   back right away.
2. Each mutation applies a pure operation from visatrack.lib.store,
   replaces `steps` and saves the full snapshot before returning.
3. reset() removes the snapshot and returns to the seed.

Storage keys follow <tracker-type>-<instance-id>:

    nz-student-visa-tracker
    nz-dependent-visa-tracker
    nz-dependent-visa-tracker-<dependent_id>

Usage:
    from visatrack.lib.tracker import Tracker, STUDENT_TRACKER_KEY
    from visatrack.lib.seed import student_visa_steps

    tracker = Tracker(STUDENT_TRACKER_KEY, student_visa_steps(), adapter)
    tracker.set_document_status("step-1", "doc-1-1", "approved")
    tracker.progress().percent
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from visatrack.lib import store
from visatrack.lib.persistence import PersistenceAdapter, validate_storage_key
from visatrack.lib.progress import TrackerProgress, summarize
from visatrack.models import (
    DocumentPatch,
    DocumentStatus,
    NewDocument,
    StepStatus,
    VisaStep,
)

log = logging.getLogger(__name__)

STUDENT_TRACKER_KEY = "nz-student-visa-tracker"
DEPENDENT_TRACKER_KEY = "nz-dependent-visa-tracker"


def dependent_tracker_key(dependent_id: str) -> str:
    return validate_storage_key(f"{DEPENDENT_TRACKER_KEY}-{dependent_id}")


class Tracker:
    """Separately persisted step sequence addressed by a storage key"""

    def __init__(
        self,
        storage_key: str,
        seed: Sequence[VisaStep],
        adapter: PersistenceAdapter,
        id_factory: store.IdFactory = store.new_document_id,
    ):
        self.storage_key = validate_storage_key(storage_key)
        self.seed = tuple(seed)
        self.adapter = adapter
        self.id_factory = id_factory
        self.last_save_ok = True

        self.steps: store.Steps = tuple(adapter.load(self.storage_key, self.seed))
        self._save()

    def _save(self) -> None:
        self.last_save_ok = self.adapter.save(self.storage_key, self.steps)

    def _commit(self, steps: store.Steps) -> store.Steps:
        self.steps = steps
        self._save()
        return steps

    def find_step(self, step_id: str) -> Optional[VisaStep]:
        return store.find_step(self.steps, step_id)

    def set_document_status(
        self, step_id: str, doc_id: str, status: Union[DocumentStatus, str]
    ) -> store.Steps:
        return self._commit(store.set_document_status(self.steps, step_id, doc_id, status))

    def edit_document(
        self,
        step_id: str,
        doc_id: str,
        fields: Union[DocumentPatch, Mapping[str, Any], None],
    ) -> store.Steps:
        return self._commit(store.edit_document(self.steps, step_id, doc_id, fields))

    def delete_document(self, step_id: str, doc_id: str) -> store.Steps:
        return self._commit(store.delete_document(self.steps, step_id, doc_id))

    def add_document(
        self, step_id: str, document: Union[NewDocument, Mapping[str, Any]]
    ) -> Optional[str]:
        """Append a document; returns its generated id (None for an unknown step)."""
        steps, new_id = store.add_document(self.steps, step_id, document, self.id_factory)
        self._commit(steps)
        return new_id

    def set_step_status(self, step_id: str, status: Union[StepStatus, str]) -> store.Steps:
        return self._commit(store.set_step_status(self.steps, step_id, status))

    def reset(self) -> store.Steps:
        """Discard the persisted snapshot and start over from the seed."""
        self.adapter.remove(self.storage_key)
        self.steps = self.seed
        log.info("tracker %s reset to seed", self.storage_key)
        return self.steps

    def progress(self) -> TrackerProgress:
        return summarize(self.steps)
