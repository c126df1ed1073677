"""
snapshot.py - Snapshot (de)serialization

A snapshot is the JSON array of a tracker's steps, exactly as the models
define them: camelCase keys (stepNumber, estimatedDays), status values as
strings, unset optionals omitted. No envelope and no version tag.
"""

from __future__ import annotations

import json
from typing import Any, Sequence, Tuple

from pydantic import TypeAdapter

from visatrack.models import VisaStep

_STEPS = TypeAdapter(Tuple[VisaStep, ...])


def steps_to_data(steps: Sequence[VisaStep]) -> list[dict[str, Any]]:
    """Steps as JSON-compatible data (wire aliases, no nulls)."""
    return _STEPS.dump_python(tuple(steps), mode="json", by_alias=True, exclude_none=True)


def dump_steps(steps: Sequence[VisaStep]) -> str:
    """Serialize a full step sequence to snapshot text."""
    return json.dumps(steps_to_data(steps), indent=2, ensure_ascii=False)


def parse_steps(data: Any) -> Tuple[VisaStep, ...]:
    """
    Validate already-decoded snapshot data into steps.

    Raises:
        pydantic.ValidationError: If data does not match the step schema
    """
    return _STEPS.validate_python(data)


def load_steps(text: str) -> Tuple[VisaStep, ...]:
    """
    Parse snapshot text into steps.

    Raises:
        json.JSONDecodeError: If text is not JSON
        pydantic.ValidationError: If data does not match the step schema
    """
    return parse_steps(json.loads(text))
