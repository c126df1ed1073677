"""
store.py - Pure mutation operations over a tracker snapshot

Every operation takes the current step sequence and returns a new tuple.
Inputs are never modified; steps and documents that are not touched are
passed through as the same objects.

Lookup misses (unknown step id or document id) return the input unchanged.
Invalid status values raise InvalidStatusError before anything is touched.

Usage:
    from visatrack.lib.store import set_document_status, add_document

    steps = set_document_status(steps, "step-1", "doc-1-1", "approved")
    steps, doc_id = add_document(steps, "step-1", {"name": "Bank letter"})
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Collection, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from visatrack.lib.errors import InvalidPatchError, InvalidStatusError
from visatrack.lib.fs.ids import new_document_id
from visatrack.models import (
    Document,
    DocumentPatch,
    DocumentStatus,
    NewDocument,
    StepStatus,
    VisaStep,
)

log = logging.getLogger(__name__)

Steps = Tuple[VisaStep, ...]
IdFactory = Callable[[str, Collection[str]], str]


def coerce_document_status(value: Any) -> DocumentStatus:
    """Return `value` as DocumentStatus or raise InvalidStatusError."""
    try:
        return DocumentStatus(value)
    except ValueError:
        raise InvalidStatusError(value, [s.value for s in DocumentStatus]) from None


def coerce_step_status(value: Any) -> StepStatus:
    """Return `value` as StepStatus or raise InvalidStatusError."""
    try:
        return StepStatus(value)
    except ValueError:
        raise InvalidStatusError(value, [s.value for s in StepStatus]) from None


def _coerce_patch(fields: Union[DocumentPatch, Mapping[str, Any], None]) -> DocumentPatch:
    if fields is None:
        return DocumentPatch()
    if isinstance(fields, DocumentPatch):
        return fields

    unknown = set(fields) - set(DocumentPatch.model_fields)
    if unknown:
        raise InvalidPatchError(
            f"Cannot edit document fields: {', '.join(sorted(unknown))}",
            fields=unknown,
        )
    try:
        return DocumentPatch(**fields)
    except ValidationError as e:
        raise InvalidPatchError(f"Invalid document edit: {e}", fields=fields.keys()) from e


def _coerce_new_document(document: Union[NewDocument, Mapping[str, Any]]) -> NewDocument:
    if isinstance(document, NewDocument):
        return document
    if "id" in document:
        raise InvalidPatchError("New documents get a generated id", fields=["id"])
    if "status" in document:
        document = {**document, "status": coerce_document_status(document["status"])}
    try:
        return NewDocument(**document)
    except ValidationError as e:
        raise InvalidPatchError(f"Invalid new document: {e}", fields=document.keys()) from e


def _replace_document(
    steps: Sequence[VisaStep],
    step_id: str,
    doc_id: str,
    update: Callable[[Document], Document],
) -> Steps:
    """Apply `update` to the one document matching step_id/doc_id."""
    result = []
    hit = False
    for step in steps:
        if step.id != step_id:
            result.append(step)
            continue

        documents = []
        changed = False
        for doc in step.documents:
            if doc.id == doc_id:
                doc = update(doc)
                changed = True
            documents.append(doc)

        if changed:
            step = step.model_copy(update={"documents": tuple(documents)})
            hit = True
        result.append(step)

    if not hit:
        log.debug("no document %s in step %s, nothing changed", doc_id, step_id)
    return tuple(result)


def set_document_status(
    steps: Sequence[VisaStep],
    step_id: str,
    doc_id: str,
    status: Union[DocumentStatus, str],
) -> Steps:
    """
    Replace the status of one document.

    Raises:
        InvalidStatusError: If `status` is not a DocumentStatus value
    """
    status = coerce_document_status(status)
    return _replace_document(
        steps, step_id, doc_id,
        lambda doc: doc.model_copy(update={"status": status}),
    )


def edit_document(
    steps: Sequence[VisaStep],
    step_id: str,
    doc_id: str,
    fields: Union[DocumentPatch, Mapping[str, Any], None],
) -> Steps:
    """
    Merge name / description / required / notes into one document.

    `id` and `status` cannot be edited here. Values are taken as given:
    trimming or keeping a previous name for blank input is up to the caller.
    An empty patch returns the input unchanged.

    Raises:
        InvalidPatchError: If `fields` names anything else
    """
    changes = _coerce_patch(fields).changes()
    if not changes:
        return tuple(steps)

    return _replace_document(
        steps, step_id, doc_id,
        lambda doc: doc.model_copy(update=changes),
    )


def delete_document(steps: Sequence[VisaStep], step_id: str, doc_id: str) -> Steps:
    """Remove one document from a step's checklist."""
    result = []
    hit = False
    for step in steps:
        if step.id == step_id and step.find_document(doc_id) is not None:
            documents = tuple(doc for doc in step.documents if doc.id != doc_id)
            step = step.model_copy(update={"documents": documents})
            hit = True
        result.append(step)

    if not hit:
        log.debug("no document %s in step %s, nothing deleted", doc_id, step_id)
    return tuple(result)


def add_document(
    steps: Sequence[VisaStep],
    step_id: str,
    document: Union[NewDocument, Mapping[str, Any]],
    id_factory: IdFactory = new_document_id,
) -> Tuple[Steps, Optional[str]]:
    """
    Append a new document to a step.

    The id is generated as "{step_id}-doc-{ULID}" and never collides with an
    id already present in the step. Status defaults to pending.

    Returns:
        (new_steps, new_id); new_id is None when the step does not exist
    """
    new_doc = _coerce_new_document(document)

    result = []
    new_id = None
    for step in steps:
        if step.id == step_id and new_id is None:
            taken = {doc.id for doc in step.documents}
            new_id = id_factory(step_id, taken)
            doc = Document(id=new_id, **new_doc.model_dump())
            step = step.model_copy(update={"documents": step.documents + (doc,)})
        result.append(step)

    if new_id is None:
        log.debug("no step %s, document not added", step_id)
    return tuple(result), new_id


def set_step_status(
    steps: Sequence[VisaStep],
    step_id: str,
    status: Union[StepStatus, str],
) -> Steps:
    """
    Replace the status of one step. Documents are not touched.

    Raises:
        InvalidStatusError: If `status` is not a StepStatus value
    """
    status = coerce_step_status(status)

    result = []
    hit = False
    for step in steps:
        if step.id == step_id:
            step = step.model_copy(update={"status": status})
            hit = True
        result.append(step)

    if not hit:
        log.debug("no step %s, status not changed", step_id)
    return tuple(result)


def find_step(steps: Sequence[VisaStep], step_id: str) -> Optional[VisaStep]:
    for step in steps:
        if step.id == step_id:
            return step
    return None
