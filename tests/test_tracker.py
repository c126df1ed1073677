"""Tests for the persisted tracker lifecycle"""

import pytest

from visatrack.lib.errors import InvalidStatusError
from visatrack.lib.persistence import PersistenceAdapter
from visatrack.lib.seed import dependent_visa_steps
from visatrack.lib.tracker import (
    DEPENDENT_TRACKER_KEY,
    STUDENT_TRACKER_KEY,
    Tracker,
    dependent_tracker_key,
)
from visatrack.models import DocumentStatus, StepStatus


class TestActivation:
    def test_seed_used_without_snapshot(self, adapter, seed):
        tracker = Tracker("a", seed, adapter)
        assert tracker.steps == seed

    def test_activation_writes_snapshot(self, storage, adapter, seed):
        Tracker("a", seed, adapter)

        assert storage.writes == ["a"]
        assert adapter.load("a", ()) == seed

    def test_snapshot_replaces_seed(self, adapter, seed, student_seed):
        adapter.save("a", seed[:1])
        tracker = Tracker("a", student_seed, adapter)

        assert tracker.steps == seed[:1]

    def test_corrupted_snapshot_uses_seed(self, storage, adapter, seed):
        storage.write("a", "not json")
        tracker = Tracker("a", seed, adapter)

        assert tracker.steps == seed


class TestMutations:
    def test_scenario_approve_first_document(self, adapter, seed):
        tracker = Tracker("a", seed, adapter)
        result = tracker.set_document_status("step-1", "doc-1-1", "approved")

        assert result is tracker.steps
        assert tracker.steps[0].documents[0].status == "approved"
        assert tracker.steps[1:] == seed[1:]
        assert adapter.load("a", seed) == tracker.steps

    def test_every_mutation_saves(self, storage, adapter, seed):
        tracker = Tracker("a", seed, adapter)
        storage.writes.clear()

        tracker.set_step_status("step-1", "completed")
        tracker.edit_document("step-2", "doc-2-2", {"name": "Photo"})
        new_id = tracker.add_document("step-3", {"name": "Arrival card"})
        tracker.delete_document("step-2", "doc-2-1")

        assert len(storage.writes) == 4
        reopened = Tracker("a", seed, adapter)
        assert reopened.steps == tracker.steps
        assert reopened.find_step("step-3").documents[0].id == new_id
        assert reopened.steps[0].status == StepStatus.COMPLETED

    def test_lookup_miss_is_silent(self, adapter, seed):
        tracker = Tracker("a", seed, adapter)

        tracker.set_document_status("step-1", "gone", "approved")
        tracker.delete_document("gone", "doc-1-1")
        assert tracker.add_document("gone", {"name": "X"}) is None
        assert tracker.steps == seed

    def test_invalid_status_does_not_write(self, storage, adapter, seed):
        tracker = Tracker("a", seed, adapter)
        storage.writes.clear()

        with pytest.raises(InvalidStatusError):
            tracker.set_document_status("step-1", "doc-1-1", "done")
        with pytest.raises(InvalidStatusError):
            tracker.set_step_status("step-1", "finished")

        assert storage.writes == []
        assert tracker.steps == seed

    def test_write_failure_keeps_memory_state(self, storage, adapter, seed):
        tracker = Tracker("a", seed, adapter)
        storage.fail_writes = True

        tracker.set_document_status("step-1", "doc-1-1", "submitted")

        assert tracker.last_save_ok is False
        assert tracker.steps[0].documents[0].status == DocumentStatus.SUBMITTED
        assert adapter.load("a", ()) == seed

        storage.fail_writes = False
        tracker.set_step_status("step-1", "completed")
        assert tracker.last_save_ok is True
        assert adapter.load("a", ()) == tracker.steps


class TestIsolation:
    def test_two_trackers_same_seed(self, adapter, seed):
        a = Tracker("a", seed, adapter)
        Tracker("b", seed, adapter)

        a.set_document_status("step-1", "doc-1-1", "approved")
        a.delete_document("step-2", "doc-2-1")

        assert adapter.load("b", seed) == seed
        assert Tracker("b", seed, adapter).steps == seed


class TestReset:
    def test_reset_removes_snapshot(self, storage, adapter, seed):
        tracker = Tracker("a", seed, adapter)
        tracker.set_step_status("step-1", "blocked")

        assert tracker.reset() == seed
        assert storage.read("a") is None


class TestKeys:
    def test_dependent_key(self):
        assert dependent_tracker_key("husband") == "nz-dependent-visa-tracker-husband"
        assert dependent_tracker_key("husband").startswith(DEPENDENT_TRACKER_KEY)

    def test_student_key(self, adapter):
        tracker = Tracker(STUDENT_TRACKER_KEY, dependent_visa_steps(), adapter)
        assert tracker.storage_key == "nz-student-visa-tracker"

    def test_invalid_key(self, adapter, seed):
        with pytest.raises(ValueError):
            Tracker("a b", seed, adapter)

    def test_memory_adapter_is_enough(self, seed):
        from visatrack.lib.persistence import MemoryStorage

        tracker = Tracker("a", seed, PersistenceAdapter(MemoryStorage()))
        tracker.set_step_status("step-2", "in-progress")
        assert tracker.progress().in_progress_steps == 2
