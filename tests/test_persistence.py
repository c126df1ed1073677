"""Tests for snapshot storage and the persistence adapter"""

import json
import logging
import os

import pytest

from visatrack.lib.errors import InvalidStorageKeyError
from visatrack.lib.persistence import (
    JsonFileStorage,
    MemoryStorage,
    PersistenceAdapter,
    dump_steps,
    validate_storage_key,
)
from visatrack.lib.store import set_document_status

ADAPTER_LOGGER = "visatrack.lib.persistence.adapter"


class TestStorageKeys:
    @pytest.mark.parametrize("key", ["nz-student-visa-tracker", "a", "b", "nz-dependent-visa-tracker-husband", "v1.2_x"])
    def test_valid(self, key):
        assert validate_storage_key(key) == key

    @pytest.mark.parametrize("key", ["", "../evil", "a/b", "-lead", "with space", None])
    def test_invalid(self, key):
        with pytest.raises(InvalidStorageKeyError):
            validate_storage_key(key)


class TestMemoryStorage:
    def test_read_missing(self):
        assert MemoryStorage().read("a") is None

    def test_write_replaces(self):
        storage = MemoryStorage()
        storage.write("a", "1")
        storage.write("a", "2")

        assert storage.read("a") == "2"
        assert storage.keys() == ["a"]

    def test_delete_missing_is_fine(self):
        storage = MemoryStorage({"a": "1"})
        storage.delete("b")
        storage.delete("a")
        assert storage.keys() == []


class TestJsonFileStorage:
    def test_roundtrip(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "trackers")
        storage.write("nz-student-visa-tracker", "[]")

        assert storage.read("nz-student-visa-tracker") == "[]"
        assert (tmp_path / "trackers" / "nz-student-visa-tracker.json").exists()

    def test_single_file_per_key(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        for i in range(5):
            storage.write("a", json.dumps([i]))

        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.json"]
        assert storage.read("a") == "[4]"

    def test_read_missing(self, tmp_path):
        assert JsonFileStorage(tmp_path / "nothing").read("a") is None

    def test_delete(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.write("a", "[]")
        storage.delete("a")
        storage.delete("a")

        assert storage.read("a") is None
        assert storage.keys() == []

    def test_rejects_path_keys(self, tmp_path):
        with pytest.raises(InvalidStorageKeyError):
            JsonFileStorage(tmp_path).write("../outside", "[]")

    def test_failed_replace_leaves_no_temp_file(self, tmp_path, monkeypatch):
        storage = JsonFileStorage(tmp_path)
        storage.write("a", "[1]")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(OSError):
            storage.write("a", "[2]")

        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.json"]
        assert storage.read("a") == "[1]"


class TestAdapterLoad:
    def test_no_snapshot_returns_seed(self, adapter, seed):
        assert adapter.load("a", seed) is seed

    def test_roundtrip(self, adapter, seed):
        changed = set_document_status(seed, "step-1", "doc-1-1", "approved")
        adapter.save("a", changed)

        assert adapter.load("a", seed) == changed

    def test_roundtrip_student_seed(self, tmp_path, student_seed):
        adapter = PersistenceAdapter(JsonFileStorage(tmp_path))
        adapter.save("nz-student-visa-tracker", student_seed)

        assert adapter.load("nz-student-visa-tracker", ()) == student_seed

    def test_persisted_replaces_seed_wholesale(self, adapter, seed, student_seed):
        adapter.save("a", student_seed)
        assert adapter.load("a", seed) == student_seed

    def test_corrupted_json_falls_back(self, storage, adapter, seed, caplog):
        storage.write("a", "[{not json")

        with caplog.at_level(logging.WARNING, logger=ADAPTER_LOGGER):
            assert adapter.load("a", seed) is seed
        assert "invalid JSON" in caplog.text

    @pytest.mark.parametrize("data", [
        {"steps": []},
        [{"id": "step-1"}],
        [{"id": "step-1", "stepNumber": 1, "title": "T", "status": "done"}],
        [{"id": "step-1", "stepNumber": 1, "title": "T",
          "documents": [{"id": "d", "name": "D", "status": "lost"}]}],
    ])
    def test_schema_mismatch_falls_back(self, storage, adapter, seed, data, caplog):
        storage.write("a", json.dumps(data))

        with caplog.at_level(logging.WARNING, logger=ADAPTER_LOGGER):
            assert adapter.load("a", seed) is seed
        assert "does not match schema" in caplog.text

    def test_read_failure_falls_back(self, storage, adapter, seed):
        storage.write("a", dump_steps(seed[:1]))
        storage.fail_reads = True

        assert adapter.load("a", seed) is seed

    def test_keys_are_isolated(self, adapter, seed):
        adapter.save("a", set_document_status(seed, "step-1", "doc-1-1", "approved"))
        assert adapter.load("b", seed) == seed


class TestAdapterSave:
    def test_snapshot_format(self, storage, adapter, seed):
        adapter.save("a", seed)
        data = json.loads(storage.read("a"))

        assert isinstance(data, list)
        assert data[1]["stepNumber"] == 2
        assert data[1]["estimatedDays"] == "2–4 weeks"
        assert data[1]["documents"][0] == {
            "id": "doc-2-1",
            "name": "Passport",
            "description": "",
            "status": "collected",
            "required": True,
        }
        assert "estimatedDays" not in data[0]

    def test_full_replace(self, storage, adapter, seed):
        adapter.save("a", seed)
        adapter.save("a", seed[:1])

        assert len(json.loads(storage.read("a"))) == 1

    def test_write_failure_is_swallowed(self, storage, adapter, seed, caplog):
        storage.fail_writes = True

        with caplog.at_level(logging.WARNING, logger=ADAPTER_LOGGER):
            assert adapter.save("a", seed) is False
        assert "could not save" in caplog.text
        assert storage.read("a") is None

    def test_invalid_key_raises(self, adapter, seed):
        with pytest.raises(InvalidStorageKeyError):
            adapter.save("a/b", seed)


class TestAdapterRemove:
    def test_remove(self, storage, adapter, seed):
        adapter.save("a", seed)
        adapter.save("b", seed)

        assert adapter.remove("a") is True
        assert storage.read("a") is None
        assert storage.read("b") is not None

    def test_remove_missing(self, adapter):
        assert adapter.remove("never-saved") is True

    def test_load_after_remove_returns_seed(self, adapter, seed, student_seed):
        adapter.save("a", student_seed)
        adapter.remove("a")
        assert adapter.load("a", seed) is seed
