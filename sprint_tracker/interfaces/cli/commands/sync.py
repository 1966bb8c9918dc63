"""GitHub sync commands: push, pull and link.

All three need the gh client; without it they exit with code 1. Push and
pull report per-task failures in their output and still exit 0.
"""

import typer

from sprint_tracker.application.sync_service import (
    PullResult,
    PushResult,
    SyncScope,
    SyncService,
    link_issue,
)
from sprint_tracker.domain.shared import Err
from sprint_tracker.interfaces.cli.common import (
    load_workspace,
    print_error,
    print_success,
    print_warning,
    require_document,
    require_tracker,
    save_document,
)


def _report_push(result: PushResult) -> None:
    typer.echo(f"\nSynced to {result.repo.full_name}\n")
    for created in result.created:
        typer.echo(f"  ✓ Created issue #{created.issue} for {created.task_id}")
    for updated in result.updated:
        typer.echo(f"  ✓ {updated.task_id}: {updated.action}")
    for task_id in result.in_sync:
        typer.echo(f"  - {task_id} already synced")
    for error in result.errors:
        typer.echo(typer.style(f"  ✗ Error for {error.task_id}: {error.error}", fg=typer.colors.RED))
    for warning in result.warnings:
        print_warning(warning)

    typer.echo("")
    print_success(f"Created: {len(result.created)} issues")
    typer.echo(typer.style(f"✓ Updated: {len(result.updated)} issues", fg=typer.colors.YELLOW))
    if result.errors:
        typer.echo(typer.style(f"✗ Errors: {len(result.errors)}", fg=typer.colors.RED))


def _report_pull(result: PullResult) -> None:
    typer.echo(f"\nPulled from {result.repo.full_name}\n")
    for updated in result.updated:
        typer.echo(f"  ✓ {updated.task_id} {updated.action} (issue closed)")
    for warning in result.warnings:
        typer.echo(typer.style(f"  ! {warning}", fg=typer.colors.YELLOW))
    for error in result.errors:
        typer.echo(typer.style(f"  ✗ Error for {error.task_id}: {error.error}", fg=typer.colors.RED))

    typer.echo("")
    print_success(f"Updated: {len(result.updated)} tasks")
    if result.errors:
        typer.echo(typer.style(f"✗ Errors: {len(result.errors)}", fg=typer.colors.RED))


def push(
    ctx: typer.Context,
    all_tasks: bool = typer.Option(False, "--all", help="Include tasks from every sprint"),
    status: str | None = typer.Option(None, "--status", "-s", help="Only push tasks with this status"),
) -> None:
    """Create or update GitHub issues from tasks.

    Unlinked tasks get a new issue; linked issues are closed or reopened
    to match the task. Issue numbers are saved back to the data file.
    """
    workspace = load_workspace(ctx)
    document = require_document(workspace)
    tracker = require_tracker(ctx, workspace)

    project = workspace.config.github_project
    result = SyncService(tracker).push(
        document,
        SyncScope(sprint_only=not all_tasks, status=status),
        project_number=project.number if project else None,
    )
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    save_document(workspace, document)
    _report_push(result.value)


def pull(ctx: typer.Context) -> None:
    """Update task status from GitHub issues.

    Tasks whose issue is closed are marked done. Done tasks with an open
    issue are only reported.
    """
    workspace = load_workspace(ctx)
    document = require_document(workspace)
    tracker = require_tracker(ctx, workspace)

    result = SyncService(tracker).pull(document)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    save_document(workspace, document)
    _report_pull(result.value)


def link(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
    issue_number: int = typer.Argument(..., help="GitHub issue number"),
) -> None:
    """Link a task to an existing GitHub issue.

    Example:
        sprint link TASK-001 42
    """
    workspace = load_workspace(ctx)
    document = require_document(workspace)
    tracker = require_tracker(ctx, workspace)

    result = link_issue(document, task_id, issue_number, tracker.get_repo())
    if isinstance(result, Err):
        print_error(result.error)
        return

    save_document(workspace, document)
    task = result.value
    print_success(f"Linked {task.id} → Issue #{issue_number}")
    if task.github_url:
        typer.echo(typer.style(f"  {task.github_url}", dim=True))
