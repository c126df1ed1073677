"""Shared fixtures: in-memory storage, adapters and small seed sequences."""

import pytest

from visatrack.lib.persistence import MemoryStorage, PersistenceAdapter
from visatrack.lib.persistence.snapshot import parse_steps
from visatrack.lib.seed import student_visa_steps


class FlakyStorage(MemoryStorage):
    """MemoryStorage that can be told to fail reads or writes."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.writes = []

    def read(self, key):
        if self.fail_reads:
            raise OSError("storage disabled")
        return super().read(key)

    def write(self, key, data):
        if self.fail_writes:
            raise OSError("quota exceeded")
        self.writes.append(key)
        super().write(key, data)


@pytest.fixture
def storage():
    return FlakyStorage()


@pytest.fixture
def adapter(storage):
    return PersistenceAdapter(storage)


@pytest.fixture
def student_seed():
    return student_visa_steps()


@pytest.fixture
def seed():
    """Three steps: one document, two documents, none."""
    return parse_steps([
        {
            "id": "step-1",
            "stepNumber": 1,
            "title": "Offer",
            "description": "Get an offer",
            "status": "in-progress",
            "documents": [
                {
                    "id": "doc-1-1",
                    "name": "Offer of Place Letter",
                    "description": "From the university",
                    "status": "pending",
                    "required": True,
                },
            ],
        },
        {
            "id": "step-2",
            "stepNumber": 2,
            "title": "Documents",
            "description": "",
            "status": "not-started",
            "estimatedDays": "2–4 weeks",
            "tips": ["Certify copies"],
            "documents": [
                {
                    "id": "doc-2-1",
                    "name": "Passport",
                    "description": "",
                    "status": "collected",
                    "required": True,
                },
                {
                    "id": "doc-2-2",
                    "name": "Photos",
                    "description": "Two recent photos",
                    "status": "pending",
                    "required": False,
                },
            ],
        },
        {
            "id": "step-3",
            "stepNumber": 3,
            "title": "Arrival",
            "description": "Land in NZ",
            "status": "not-started",
            "documents": [],
        },
    ])
