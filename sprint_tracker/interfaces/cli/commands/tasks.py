"""Task mutation commands: add, move and edit.

Each command loads the document, applies one change and saves the whole
document. A rejected change is reported and nothing is written.
"""

import typer

from sprint_tracker.application.task_service import create_task, edit_task, move_task
from sprint_tracker.domain.shared import Err
from sprint_tracker.interfaces.cli.common import (
    load_workspace,
    print_error,
    print_success,
    require_document,
    save_document,
)


def add(
    ctx: typer.Context,
    title: list[str] = typer.Argument(..., help="Task title"),
) -> None:
    """Add a new task to the current sprint's backlog.

    Example:
        sprint add Implement login feature
    """
    workspace = load_workspace(ctx)
    document = require_document(workspace)

    result = create_task(document, " ".join(title), workspace.config.task_prefix)
    if isinstance(result, Err):
        print_error(result.error)
        return

    save_document(workspace, document)
    task = result.value
    print_success(f"Created {task.id}: {task.title}")
    typer.echo(f"  Edit with: sprint edit {task.id} <field> <value>")


def move(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
    new_status: str = typer.Argument(..., help="Target column"),
) -> None:
    """Move a task to another column.

    Example:
        sprint move TASK-001 in_progress
    """
    workspace = load_workspace(ctx)
    document = require_document(workspace)

    result = move_task(document, task_id, new_status, workspace.columns)
    if isinstance(result, Err):
        print_error(result.error)
        return

    save_document(workspace, document)
    change = result.value
    print_success(f"{change.task_id}: {change.old_status} → {change.new_status}")


def edit(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
    field: str = typer.Argument(..., help="Field to change"),
    value: list[str] = typer.Argument(..., help="New value"),
) -> None:
    """Edit one task field.

    Example:
        sprint edit TASK-001 priority high
    """
    workspace = load_workspace(ctx)
    document = require_document(workspace)

    result = edit_task(document, task_id, field, " ".join(value))
    if isinstance(result, Err):
        print_error(result.error)
        return

    save_document(workspace, document)
    change = result.value
    old = change.old_value if change.old_value not in (None, "") else "(empty)"
    print_success(f"{change.task_id}.{change.field}: {old} → {change.new_value}")
