"""Read-only views of the sprint document, plus markdown board generation."""

from datetime import UTC, datetime

import typer

from sprint_tracker.domain.shared import Err
from sprint_tracker.domain.sprint import active_tasks, find_task
from sprint_tracker.infrastructure.storage import JsonStorage
from sprint_tracker.interfaces.cli.common import (
    load_workspace,
    print_error,
    print_success,
    require_document,
)
from sprint_tracker.interfaces.cli.render import (
    render_board,
    render_debt,
    render_markdown_board,
    render_status,
    render_task_detail,
    render_task_list,
)


def board(ctx: typer.Context) -> None:
    """Show the kanban board for the current sprint."""
    workspace = load_workspace(ctx)
    document = require_document(workspace)
    typer.echo(render_board(document, workspace.columns))


def status(ctx: typer.Context) -> None:
    """Show sprint summary: tasks per status, points and capacity."""
    workspace = load_workspace(ctx)
    document = require_document(workspace)
    typer.echo(render_status(document))


def list_tasks(
    ctx: typer.Context,
    status: str | None = typer.Argument(None, help="Only show tasks with this status"),
) -> None:
    """List tasks in the current sprint."""
    workspace = load_workspace(ctx)
    document = require_document(workspace)

    tasks = active_tasks(document)
    if status:
        tasks = [t for t in tasks if t.status == status]
    typer.echo(render_task_list(tasks))


def show(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id, e.g. TASK-001"),
) -> None:
    """Show task details."""
    workspace = load_workspace(ctx)
    document = require_document(workspace)

    task = find_task(document.tasks, task_id)
    if task is None:
        print_error(f"Task not found: {task_id}")
        return
    typer.echo(render_task_detail(task))


def debt(ctx: typer.Context) -> None:
    """Show technical debt items and their progress."""
    workspace = load_workspace(ctx)
    document = require_document(workspace)
    typer.echo(render_debt(document))


def generate(ctx: typer.Context) -> None:
    """Write the markdown board file (SPRINT_BOARD.md by default)."""
    workspace = load_workspace(ctx)
    document = require_document(workspace)

    markdown = render_markdown_board(document, workspace.columns, datetime.now(UTC))
    result = JsonStorage().save_text(workspace.board_path, markdown)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    print_success(f"Generated {workspace.config.board_file}")
