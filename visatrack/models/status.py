"""Status enums - Document and step status values"""

from enum import Enum


class DocumentStatus(str, Enum):
    """Checklist status of a single document"""

    PENDING = "pending"
    COLLECTED = "collected"
    SUBMITTED = "submitted"
    APPROVED = "approved"


class StepStatus(str, Enum):
    """Status of a visa step (set manually, never derived from documents)"""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


# Statuses that count a document as done for progress purposes
DONE_DOCUMENT_STATUSES = frozenset({
    DocumentStatus.COLLECTED,
    DocumentStatus.SUBMITTED,
    DocumentStatus.APPROVED,
})
