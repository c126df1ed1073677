"""
visatrack Pydantic Models

Wire format matches the persisted snapshot: camelCase aliases for
stepNumber / estimatedDays, status values as plain strings.
"""

from .status import DocumentStatus, StepStatus, DONE_DOCUMENT_STATUSES
from .document import Document, NewDocument, DocumentPatch
from .step import VisaStep

__all__ = [
    "DocumentStatus",
    "StepStatus",
    "DONE_DOCUMENT_STATUSES",
    "Document",
    "NewDocument",
    "DocumentPatch",
    "VisaStep",
]
