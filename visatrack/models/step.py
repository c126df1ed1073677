"""VisaStep model - One phase of the visa process"""

from pydantic import BaseModel, Field
from typing import Optional, Tuple

from .document import Document
from .status import StepStatus


class VisaStep(BaseModel):
    """Named phase of the visa process holding an ordered document checklist"""

    id: str = Field(
        ...,
        min_length=1,
        description="Step identifier, unique within its tracker"
    )

    step_number: int = Field(
        ...,
        alias="stepNumber",
        description="Display label only; sequence order is authoritative"
    )

    title: str = Field(
        ...,
        description="Display title"
    )

    description: str = Field(
        "",
        description="Display description"
    )

    status: StepStatus = Field(
        StepStatus.NOT_STARTED,
        description="Manually set step status"
    )

    documents: Tuple[Document, ...] = Field(
        (),
        description="Ordered document checklist (append order)"
    )

    estimated_days: Optional[str] = Field(
        None,
        alias="estimatedDays",
        description="Display hint for expected duration",
        examples=["2–8 weeks", "Ongoing"]
    )

    tips: Optional[Tuple[str, ...]] = Field(
        None,
        description="Display tips"
    )

    class Config:
        extra = "forbid"
        frozen = True
        populate_by_name = True

    def find_document(self, doc_id: str) -> Optional[Document]:
        for doc in self.documents:
            if doc.id == doc_id:
                return doc
        return None
