"""
visatrack/lib/fs/ids.py - Document and Dependent Id Generation

Document ids added by the user follow the pattern:

    {step_id}-doc-{ULID}

    Example: step-2-doc-01JB2X5K9Q7W8M3N6P1R4T0VAB

The ULID suffix is time-ordered (millisecond timestamp prefix) with a random
tail, so ids generated in one session never collide in practice. Callers
that need a hard guarantee pass the set of taken ids.

Dependent ids follow the pattern {slug}-{epoch_millis}, e.g.
"grandma-1760780000000". When that id is taken the millisecond part is
bumped until it is free.

Usage:
    from visatrack.lib.fs.ids import new_document_id, new_dependent_id

    doc_id = new_document_id("step-2", taken={"doc-2-1", "doc-2-2"})
    dep_id = new_dependent_id("Grandma", taken={"husband", "daughter"})
"""
import time
from typing import Callable, Collection, Optional

from ulid import ULID

from .slug import make_slug


def new_ulid() -> str:
    """
    Generate a new ULID as string.

    Returns:
        str: 26-character ULID (e.g., "01HAR6DP2M7G1KQ3Y3VQ8C0QXY")
    """
    return str(ULID())


def new_document_id(
    step_id: str,
    taken: Optional[Collection[str]] = None,
    token_factory: Callable[[], str] = new_ulid,
) -> str:
    """
    Generate a document id for a step that is not in `taken`.

    Args:
        step_id: Id of the owning step (used as prefix)
        taken: Ids already used in that step
        token_factory: Source of the unique suffix (ULID by default)

    Returns:
        str: "{step_id}-doc-{token}"
    """
    taken = taken or ()
    while True:
        candidate = f"{step_id}-doc-{token_factory()}"
        if candidate not in taken:
            return candidate


def new_dependent_id(
    name: str,
    taken: Optional[Collection[str]] = None,
    now_ms: Optional[int] = None,
) -> str:
    """
    Build a dependent id from a display name that is not in `taken`.

    Example:
        >>> new_dependent_id("Little Sister", now_ms=1760780000000)
        'little-sister-1760780000000'
        >>> new_dependent_id("Son", taken={"son-5"}, now_ms=5)
        'son-6'
    """
    taken = taken or ()
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000

    slug = make_slug(name)
    while f"{slug}-{now_ms}" in taken:
        now_ms += 1
    return f"{slug}-{now_ms}"
