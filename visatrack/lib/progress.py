"""
progress.py - Read-only progress projections over a snapshot

Nothing here is stored; every value is recomputed from the current steps.

- step progress: documents in collected/submitted/approved over all
  documents of the step (0 for a step without documents)
- tracker progress: completed steps over all steps (0 for no steps)

Percentages are rounded half up, so 2 of 8 shows as 25% and 1 of 8 as 13%.
"""

from __future__ import annotations

import math
from typing import Sequence

from pydantic import BaseModel, Field

from visatrack.models import DONE_DOCUMENT_STATUSES, StepStatus, VisaStep


def _fraction(done: int, total: int) -> float:
    return done / total if total > 0 else 0.0


def to_percent(fraction: float) -> int:
    """Round a 0..1 fraction to a whole percentage (half up)."""
    return int(math.floor(fraction * 100 + 0.5))


def done_documents(step: VisaStep) -> int:
    return sum(1 for doc in step.documents if doc.status in DONE_DOCUMENT_STATUSES)


def step_progress(step: VisaStep) -> float:
    return _fraction(done_documents(step), len(step.documents))


def tracker_progress(steps: Sequence[VisaStep]) -> float:
    completed = sum(1 for step in steps if step.status == StepStatus.COMPLETED)
    return _fraction(completed, len(steps))


class StepProgress(BaseModel):
    """Progress of one step"""

    step_id: str
    done_documents: int = Field(..., ge=0)
    total_documents: int = Field(..., ge=0)
    fraction: float = Field(..., ge=0.0, le=1.0)
    percent: int = Field(..., ge=0, le=100)

    class Config:
        extra = "forbid"
        frozen = True


class TrackerProgress(BaseModel):
    """Progress of a whole tracker"""

    total_steps: int = Field(..., ge=0)
    completed_steps: int = Field(..., ge=0)
    in_progress_steps: int = Field(..., ge=0)
    blocked_steps: int = Field(..., ge=0)
    done_documents: int = Field(..., ge=0)
    total_documents: int = Field(..., ge=0)
    fraction: float = Field(..., ge=0.0, le=1.0)
    percent: int = Field(..., ge=0, le=100)
    steps: list[StepProgress] = Field(default_factory=list)

    class Config:
        extra = "forbid"
        frozen = True


def summarize_step(step: VisaStep) -> StepProgress:
    fraction = step_progress(step)
    return StepProgress(
        step_id=step.id,
        done_documents=done_documents(step),
        total_documents=len(step.documents),
        fraction=fraction,
        percent=to_percent(fraction),
    )


def summarize(steps: Sequence[VisaStep]) -> TrackerProgress:
    """Full progress projection for a tracker snapshot."""
    fraction = tracker_progress(steps)
    per_step = [summarize_step(step) for step in steps]
    return TrackerProgress(
        total_steps=len(steps),
        completed_steps=sum(1 for s in steps if s.status == StepStatus.COMPLETED),
        in_progress_steps=sum(1 for s in steps if s.status == StepStatus.IN_PROGRESS),
        blocked_steps=sum(1 for s in steps if s.status == StepStatus.BLOCKED),
        done_documents=sum(p.done_documents for p in per_step),
        total_documents=sum(p.total_documents for p in per_step),
        fraction=fraction,
        percent=to_percent(fraction),
        steps=per_step,
    )
