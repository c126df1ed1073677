"""
cli.py - Command line view for visa trackers

Works on the student tracker by default, or on a dependent's tracker with
--dependent/-d ID. "-d shared" opens the household-wide dependent tracker.
Every change is saved immediately.

Usage:
    visatrack show
    visatrack show --tips --format json
    visatrack progress -d husband
    visatrack show -d shared
    visatrack set-doc step-1 doc-1-1 approved
    visatrack set-step step-1 completed
    visatrack add-doc step-2 "Bank letter" --description "Stamped" --required
    visatrack edit-doc step-2 doc-2-4 --name "Scholarship Award" --optional
    visatrack delete-doc step-2 doc-2-4
    visatrack reset --yes
    visatrack dependents list
    visatrack dependents add "Grandma"
    visatrack dependents remove grandma-1760780000000
"""

import json
from pathlib import Path
from typing import Optional

import typer

from visatrack.lib.config import get_data_dir
from visatrack.lib.dependents import SHARED_DEPENDENT_ID, DependentRegistry
from visatrack.lib.errors import DependentNotFoundError, InvalidPatchError, InvalidStatusError
from visatrack.lib.log import setup_logging
from visatrack.lib.persistence import JsonFileStorage, PersistenceAdapter
from visatrack.lib.persistence.snapshot import steps_to_data
from visatrack.lib.progress import summarize_step
from visatrack.lib.seed import IMMIGRATION_NZ_URL, student_visa_steps
from visatrack.lib.tracker import STUDENT_TRACKER_KEY, Tracker
from visatrack.models import DocumentStatus, StepStatus

app = typer.Typer(
    help="New Zealand visa application tracker",
    add_completion=False,
    no_args_is_help=True,
)
dependents_app = typer.Typer(
    help="Manage dependent visa trackers",
    no_args_is_help=True,
)
app.add_typer(dependents_app, name="dependents")

DOC_MARKS = {
    DocumentStatus.PENDING: "○",
    DocumentStatus.COLLECTED: "◐",
    DocumentStatus.SUBMITTED: "◑",
    DocumentStatus.APPROVED: "●",
}


def _dependent_option():
    return typer.Option(None, "--dependent", "-d", help="Dependent id, or 'shared' (default: student tracker)")


def _format_option():
    return typer.Option("human", "--format", "-f", help="Output format: human or json")


def _fail(message: str, code: int = 1) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code)


def _registry(ctx: typer.Context) -> DependentRegistry:
    return DependentRegistry(ctx.obj)


def _open_tracker(ctx: typer.Context, dependent: Optional[str]) -> Tracker:
    if dependent is None:
        return Tracker(STUDENT_TRACKER_KEY, student_visa_steps(), ctx.obj)
    try:
        return _registry(ctx).tracker(dependent)
    except DependentNotFoundError as e:
        _fail(e.message)


def _warn_if_unsaved(tracker: Tracker) -> None:
    if not tracker.last_save_ok:
        typer.echo(
            "Warning: could not save changes; they only last for this session.",
            err=True,
        )


def _require_document(tracker: Tracker, step_id: str, doc_id: str) -> None:
    step = tracker.find_step(step_id)
    if step is None:
        _fail(f"No step {step_id}")
    if step.find_document(doc_id) is None:
        _fail(f"No document {doc_id} in step {step_id}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Snapshot directory (default: from config.toml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    setup_logging("DEBUG" if verbose else None)
    ctx.obj = PersistenceAdapter(JsonFileStorage(data_dir or get_data_dir()))


@app.command()
def show(
    ctx: typer.Context,
    dependent: Optional[str] = _dependent_option(),
    tips: bool = typer.Option(False, "--tips", help="Show tips for each step"),
    format: str = _format_option(),
):
    """Show all steps and their document checklists."""
    tracker = _open_tracker(ctx, dependent)

    if format == "json":
        output = {
            "storage_key": tracker.storage_key,
            "steps": steps_to_data(tracker.steps),
            "progress": tracker.progress().model_dump(mode="json"),
        }
        typer.echo(json.dumps(output, indent=2, ensure_ascii=False))
        return

    overall = tracker.progress()
    typer.echo(f"{tracker.storage_key}")
    typer.echo(
        f"Overall: {overall.completed_steps}/{overall.total_steps} steps completed "
        f"({overall.percent}%), {overall.done_documents}/{overall.total_documents} documents done"
    )

    for step in tracker.steps:
        sp = summarize_step(step)
        typer.echo()
        header = f"[{step.step_number}] {step.title} ({step.id}) - {step.status.value}"
        if sp.total_documents:
            header += f" - {sp.done_documents}/{sp.total_documents} docs ({sp.percent}%)"
        if step.estimated_days:
            header += f" - ~{step.estimated_days}"
        typer.echo(header)
        if step.description:
            typer.echo(f"    {step.description}")

        if not step.documents:
            typer.echo("    (no documents)")
        for doc in step.documents:
            flag = " (required)" if doc.required else ""
            typer.echo(f"    {DOC_MARKS[doc.status]} {doc.id}  {doc.name} [{doc.status.value}]{flag}")
            if doc.description:
                typer.echo(f"        {doc.description}")
            if doc.notes:
                typer.echo(f"        Note: {doc.notes}")

        if tips and step.tips:
            for tip in step.tips:
                typer.echo(f"    * {tip}")

    typer.echo()
    typer.echo(f"Always check {IMMIGRATION_NZ_URL} for current requirements.")


@app.command()
def progress(
    ctx: typer.Context,
    dependent: Optional[str] = _dependent_option(),
    format: str = _format_option(),
):
    """Show step and document progress."""
    tracker = _open_tracker(ctx, dependent)
    overall = tracker.progress()

    if format == "json":
        typer.echo(json.dumps(overall.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return

    typer.echo(f"Steps completed: {overall.completed_steps}/{overall.total_steps} ({overall.percent}%)")
    typer.echo(f"In progress: {overall.in_progress_steps}  Blocked: {overall.blocked_steps}")
    typer.echo(f"Documents done: {overall.done_documents}/{overall.total_documents}")
    for sp in overall.steps:
        typer.echo(f"  {sp.step_id}: {sp.done_documents}/{sp.total_documents} ({sp.percent}%)")


@app.command("set-doc")
def set_doc(
    ctx: typer.Context,
    step_id: str = typer.Argument(..., help="Step id, e.g. step-1"),
    doc_id: str = typer.Argument(..., help="Document id, e.g. doc-1-1"),
    status: str = typer.Argument(..., help=f"One of: {', '.join(s.value for s in DocumentStatus)}"),
    dependent: Optional[str] = _dependent_option(),
):
    """Change a document's status."""
    tracker = _open_tracker(ctx, dependent)
    _require_document(tracker, step_id, doc_id)
    try:
        tracker.set_document_status(step_id, doc_id, status)
    except InvalidStatusError as e:
        _fail(e.message, code=2)
    _warn_if_unsaved(tracker)
    typer.echo(f"{doc_id}: {status}")


@app.command("set-step")
def set_step(
    ctx: typer.Context,
    step_id: str = typer.Argument(..., help="Step id, e.g. step-1"),
    status: str = typer.Argument(..., help=f"One of: {', '.join(s.value for s in StepStatus)}"),
    dependent: Optional[str] = _dependent_option(),
):
    """Change a step's status."""
    tracker = _open_tracker(ctx, dependent)
    if tracker.find_step(step_id) is None:
        _fail(f"No step {step_id}")
    try:
        tracker.set_step_status(step_id, status)
    except InvalidStatusError as e:
        _fail(e.message, code=2)
    _warn_if_unsaved(tracker)
    typer.echo(f"{step_id}: {status}")


@app.command("add-doc")
def add_doc(
    ctx: typer.Context,
    step_id: str = typer.Argument(..., help="Step id, e.g. step-2"),
    name: str = typer.Argument(..., help="Document name"),
    description: str = typer.Option("", "--description", help="Description"),
    required: bool = typer.Option(False, "--required/--optional", help="Mark as required"),
    dependent: Optional[str] = _dependent_option(),
):
    """Append a document to a step's checklist."""
    name = name.strip()
    if not name:
        _fail("Document name must not be blank")

    tracker = _open_tracker(ctx, dependent)
    if tracker.find_step(step_id) is None:
        _fail(f"No step {step_id}")

    new_id = tracker.add_document(
        step_id,
        {"name": name, "description": description.strip(), "required": required},
    )
    _warn_if_unsaved(tracker)
    typer.echo(new_id)


@app.command("edit-doc")
def edit_doc(
    ctx: typer.Context,
    step_id: str = typer.Argument(..., help="Step id"),
    doc_id: str = typer.Argument(..., help="Document id"),
    name: Optional[str] = typer.Option(None, "--name", help="New name (blank keeps the current one)"),
    description: Optional[str] = typer.Option(None, "--description", help="New description"),
    required: Optional[bool] = typer.Option(None, "--required/--optional", help="Required flag"),
    notes: Optional[str] = typer.Option(None, "--notes", help="Free-form notes (blank clears them)"),
    dependent: Optional[str] = _dependent_option(),
):
    """Edit a document's name, description, required flag or notes."""
    tracker = _open_tracker(ctx, dependent)
    _require_document(tracker, step_id, doc_id)

    fields = {}
    if name is not None and name.strip():
        fields["name"] = name.strip()
    if description is not None:
        fields["description"] = description.strip()
    if required is not None:
        fields["required"] = required
    if notes is not None:
        fields["notes"] = notes.strip() or None

    if not fields:
        typer.echo("Nothing to change.")
        return

    try:
        tracker.edit_document(step_id, doc_id, fields)
    except InvalidPatchError as e:
        _fail(e.message, code=2)
    _warn_if_unsaved(tracker)
    typer.echo(f"{doc_id}: updated {', '.join(sorted(fields))}")


@app.command("delete-doc")
def delete_doc(
    ctx: typer.Context,
    step_id: str = typer.Argument(..., help="Step id"),
    doc_id: str = typer.Argument(..., help="Document id"),
    dependent: Optional[str] = _dependent_option(),
):
    """Remove a document from a step's checklist."""
    tracker = _open_tracker(ctx, dependent)
    _require_document(tracker, step_id, doc_id)
    tracker.delete_document(step_id, doc_id)
    _warn_if_unsaved(tracker)
    typer.echo(f"{doc_id}: deleted")


@app.command()
def reset(
    ctx: typer.Context,
    dependent: Optional[str] = _dependent_option(),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Discard all changes and go back to the default checklist."""
    tracker = _open_tracker(ctx, dependent)
    if not yes:
        typer.confirm(
            f"Reset {tracker.storage_key}? All changes will be lost.",
            abort=True,
        )
    tracker.reset()
    typer.echo(f"{tracker.storage_key}: reset")


@dependents_app.command("list")
def dependents_list(ctx: typer.Context):
    """List dependents with their tracker progress."""
    registry = _registry(ctx)
    shared = registry.shared_tracker().progress()
    typer.echo(
        f"{SHARED_DEPENDENT_ID}  (household)  "
        f"{shared.completed_steps}/{shared.total_steps} steps ({shared.percent}%)"
    )
    if not registry.dependents:
        typer.echo("No dependents. Add one with: visatrack dependents add NAME")
        return
    for dependent in registry.dependents:
        overall = registry.tracker(dependent.id).progress()
        typer.echo(
            f"{dependent.id}  {dependent.name}  "
            f"{overall.completed_steps}/{overall.total_steps} steps ({overall.percent}%)"
        )


@dependents_app.command("add")
def dependents_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Display name, e.g. Wife, Son"),
):
    """Add a dependent with a fresh tracker."""
    try:
        dependent = _registry(ctx).add(name)
    except InvalidPatchError as e:
        _fail(e.message)
    typer.echo(dependent.id)


@dependents_app.command("remove")
def dependents_remove(
    ctx: typer.Context,
    dependent_id: str = typer.Argument(..., help="Dependent id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Remove a dependent and delete its tracker data."""
    registry = _registry(ctx)
    dependent = registry.get(dependent_id)
    if dependent is None:
        _fail(f"Dependent not found: {dependent_id}")

    if not yes:
        typer.confirm(
            f"Remove the visa tracker for {dependent.name}? All data will be lost.",
            abort=True,
        )
    registry.remove(dependent_id)
    typer.echo(f"{dependent_id}: removed")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
