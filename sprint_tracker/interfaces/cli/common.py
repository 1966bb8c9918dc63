"""Shared utilities for Sprint Tracker CLI commands.

This module provides common utilities used across CLI commands:
- Workspace and document loading with user-facing error handling
- The per-invocation CLI state carrying the issue tracker client
- Formatted output helpers (error, success, warning)

Environment problems (unreadable config, missing data file, missing gh)
end the command with exit code 1. Usage and lookup problems are
reported and the command returns normally.
"""

from dataclasses import dataclass
from pathlib import Path

import typer

from sprint_tracker.application.sync_service import GH_NOT_FOUND, IssueTracker
from sprint_tracker.domain.shared import Err
from sprint_tracker.domain.sprint import SprintDocument
from sprint_tracker.infrastructure.github import GhClient
from sprint_tracker.infrastructure.storage import (
    ConfigRepository,
    DocumentRepository,
    Workspace,
)


@dataclass
class CliState:
    """Dependencies for one CLI invocation, stored as the Click context object.

    Attributes:
        tracker: Issue tracker client. A GhClient rooted at the workspace
            is created on first use when none was supplied.
        cwd: Directory to start config discovery from (default: cwd).
    """

    tracker: IssueTracker | None = None
    cwd: Path | None = None


def get_state(ctx: typer.Context) -> CliState:
    return ctx.ensure_object(CliState)


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(f"✓ {msg}", fg=typer.colors.GREEN))


def print_warning(msg: str) -> None:
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def load_workspace(ctx: typer.Context) -> Workspace:
    """Discover the project config, exiting on an invalid config file.

    Raises:
        typer.Exit: If a config file exists but cannot be loaded.
    """
    state = get_state(ctx)
    result = ConfigRepository().discover(state.cwd or Path.cwd())
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def require_document(workspace: Workspace) -> SprintDocument:
    """Load the sprint document, exiting when it is missing or invalid.

    Raises:
        typer.Exit: If the data file does not exist or fails validation.
    """
    repo = DocumentRepository()
    if not repo.exists(workspace.data_path):
        print_error(f"No {workspace.data_path.name} found. Run: sprint init")
        raise typer.Exit(1)

    result = repo.load(workspace.data_path)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def save_document(workspace: Workspace, document: SprintDocument) -> None:
    """Persist the whole document, exiting if the write fails.

    Raises:
        typer.Exit: If the data file cannot be written.
    """
    result = DocumentRepository().save(workspace.data_path, document)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)


def require_tracker(ctx: typer.Context, workspace: Workspace) -> IssueTracker:
    """Return the issue tracker client, exiting when gh is not installed.

    Raises:
        typer.Exit: If the tracker client is not available.
    """
    state = get_state(ctx)
    if state.tracker is None:
        state.tracker = GhClient(cwd=workspace.root)

    if not state.tracker.is_available():
        print_error(GH_NOT_FOUND)
        raise typer.Exit(1)
    return state.tracker


__all__ = [
    "CliState",
    "get_state",
    "print_error",
    "print_success",
    "print_warning",
    "load_workspace",
    "require_document",
    "save_document",
    "require_tracker",
]
