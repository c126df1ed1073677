"""Document models - Checklist items within a visa step"""

from pydantic import BaseModel, Field
from typing import Optional

from .status import DocumentStatus

NULLABLE_PATCH_FIELDS = frozenset({"notes"})


class Document(BaseModel):
    """Checklist item within a step (id unique within its step only)"""

    id: str = Field(
        ...,
        min_length=1,
        description="Document identifier, unique within the owning step",
        examples=["doc-1-1", "step-1-doc-01JB2X5K9Q7W8M3N6P1R4T0VAB"]
    )

    name: str = Field(
        ...,
        description="Display name"
    )

    description: str = Field(
        "",
        description="Display description, may be empty"
    )

    status: DocumentStatus = Field(
        DocumentStatus.PENDING,
        description="Checklist status"
    )

    required: bool = Field(
        False,
        description="Display flag only, no behavioral effect"
    )

    notes: Optional[str] = Field(
        None,
        description="Free-form notes (reserved, not populated by seed data)"
    )

    class Config:
        extra = "forbid"
        frozen = True
        json_schema_extra = {
            "examples": [
                {
                    "id": "doc-1-1",
                    "name": "Offer of Place Letter",
                    "description": "Official acceptance letter from the NZ university",
                    "status": "pending",
                    "required": True
                }
            ]
        }


class NewDocument(BaseModel):
    """Document fields supplied when adding; the id is generated by the store"""

    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )

    description: str = Field(
        "",
        description="Display description, may be empty"
    )

    status: DocumentStatus = Field(
        DocumentStatus.PENDING,
        description="Initial status"
    )

    required: bool = Field(
        False,
        description="Display flag only"
    )

    notes: Optional[str] = Field(
        None,
        description="Free-form notes"
    )

    class Config:
        extra = "forbid"
        frozen = True


class DocumentPatch(BaseModel):
    """Partial update for a document; only fields that were set are applied"""

    name: Optional[str] = None
    description: Optional[str] = None
    required: Optional[bool] = None
    notes: Optional[str] = None

    class Config:
        extra = "forbid"
        frozen = True

    def changes(self) -> dict:
        """
        Fields explicitly provided.

        An explicit None clears `notes`; for the other fields it is ignored.
        """
        return {
            k: v for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_PATCH_FIELDS
        }
