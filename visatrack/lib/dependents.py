"""
dependents.py - Registry of dependent tracker instances

Each dependent (spouse/partner, child) gets its own tracker seeded from the
dependent track and stored under nz-dependent-visa-tracker-<id>. The list of
dependents itself is stored under DEPENDENTS_KEY with the same failure
semantics as snapshots: unusable data falls back to the defaults, failed
writes are logged.

The household-wide dependent tracker (nz-dependent-visa-tracker, no id
suffix) is opened with the reserved id "shared". It is not part of the list
and cannot be removed.

Removing a dependent also removes its tracker snapshot. That is the only
place a tracker's persisted state is ever deleted besides an explicit reset.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Collection, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from visatrack.lib.errors import DependentNotFoundError, InvalidPatchError
from visatrack.lib.fs.ids import new_dependent_id
from visatrack.lib.persistence import PersistenceAdapter
from visatrack.lib.seed import dependent_visa_steps
from visatrack.lib.tracker import DEPENDENT_TRACKER_KEY, Tracker, dependent_tracker_key

log = logging.getLogger(__name__)

DEPENDENTS_KEY = "nz-dependents"
SHARED_DEPENDENT_ID = "shared"


class Dependent(BaseModel):
    """A dependent with its own tracker"""

    id: str = Field(
        ...,
        pattern=r"^[a-z0-9][a-z0-9-]*$",
        description="Id used in the dependent's storage key"
    )

    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )

    class Config:
        extra = "forbid"
        frozen = True

    @field_validator("id")
    @classmethod
    def not_reserved(cls, v: str) -> str:
        if v == SHARED_DEPENDENT_ID:
            raise ValueError(f"'{SHARED_DEPENDENT_ID}' is reserved for the shared tracker")
        return v


DEFAULT_DEPENDENTS: Tuple[Dependent, ...] = (
    Dependent(id="husband", name="Husband"),
    Dependent(id="daughter", name="Daughter"),
)

_DEPENDENTS = TypeAdapter(Tuple[Dependent, ...])


def _parse_dependents(text: str) -> Tuple[Dependent, ...]:
    return _DEPENDENTS.validate_python(json.loads(text))


class DependentRegistry:
    """Persisted, ordered list of dependents"""

    def __init__(
        self,
        adapter: PersistenceAdapter,
        defaults: Sequence[Dependent] = DEFAULT_DEPENDENTS,
        id_factory: Callable[[str, Collection[str]], str] = new_dependent_id,
    ):
        self.adapter = adapter
        self.id_factory = id_factory
        self.dependents: Tuple[Dependent, ...] = tuple(
            adapter.load_value(DEPENDENTS_KEY, _parse_dependents, tuple(defaults))
        )

    def _save(self) -> bool:
        data = _DEPENDENTS.dump_python(self.dependents, mode="json")
        return self.adapter.save_value(DEPENDENTS_KEY, json.dumps(data, indent=2, ensure_ascii=False))

    def get(self, dependent_id: str) -> Optional[Dependent]:
        for dependent in self.dependents:
            if dependent.id == dependent_id:
                return dependent
        return None

    def add(self, name: str) -> Dependent:
        """
        Register a dependent by display name.

        The id factory gets the ids already registered and must return a
        new one, so no two dependents ever share a storage key.

        Raises:
            InvalidPatchError: If the name is blank or the id is taken
        """
        name = (name or "").strip()
        if not name:
            raise InvalidPatchError("Dependent name must not be blank", fields=["name"])

        taken = {d.id for d in self.dependents}
        dependent_id = self.id_factory(name, taken)
        if dependent_id in taken:
            raise InvalidPatchError(f"Dependent id already registered: {dependent_id}", fields=["id"])

        dependent = Dependent(id=dependent_id, name=name)
        self.dependents = self.dependents + (dependent,)
        self._save()
        log.info("added dependent id=%s", dependent.id)
        return dependent

    def remove(self, dependent_id: str) -> Dependent:
        """
        Drop a dependent and delete its tracker snapshot.

        Raises:
            DependentNotFoundError: If no dependent has that id
        """
        dependent = self.get(dependent_id)
        if dependent is None:
            raise DependentNotFoundError(dependent_id)

        self.dependents = tuple(d for d in self.dependents if d.id != dependent_id)
        self._save()
        self.adapter.remove(dependent_tracker_key(dependent_id))
        log.info("removed dependent id=%s", dependent_id)
        return dependent

    def shared_tracker(self) -> Tracker:
        """Open the household-wide dependent tracker."""
        return Tracker(DEPENDENT_TRACKER_KEY, dependent_visa_steps(), self.adapter)

    def tracker(self, dependent_id: str) -> Tracker:
        """
        Open the tracker of a registered dependent, or the shared one for
        SHARED_DEPENDENT_ID.

        Raises:
            DependentNotFoundError: If no dependent has that id
        """
        if dependent_id == SHARED_DEPENDENT_ID:
            return self.shared_tracker()
        if self.get(dependent_id) is None:
            raise DependentNotFoundError(dependent_id)
        return Tracker(dependent_tracker_key(dependent_id), dependent_visa_steps(), self.adapter)
