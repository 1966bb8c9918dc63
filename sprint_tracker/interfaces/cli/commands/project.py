"""Project setup commands: init and help."""

from datetime import UTC, date, datetime
from pathlib import Path

import typer

from sprint_tracker.application.project_service import create_project
from sprint_tracker.domain.shared import Err
from sprint_tracker.domain.sprint import CONFIG_FILE_NAME
from sprint_tracker.infrastructure.storage import ConfigRepository, DocumentRepository
from sprint_tracker.interfaces.cli.common import get_state, print_error, print_success
from sprint_tracker.interfaces.cli.render import HELP_TEXT


def init(
    ctx: typer.Context,
    name: str | None = typer.Argument(None, help="Project name (default: directory name)"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing project files"),
) -> None:
    """Initialize tracker in the current directory.

    Creates .sprint-tracker.json and an empty sprint-data.json for
    sprint 1, running two weeks from today.

    Example:
        sprint init "My Project"
    """
    cwd = get_state(ctx).cwd or Path.cwd()
    result = create_project(name or cwd.name, date.today(), datetime.now(UTC))
    if isinstance(result, Err):
        print_error(result.error)
        return
    config, document = result.value
    config_path = cwd / CONFIG_FILE_NAME
    data_path = cwd / config.data_file
    for path in (config_path, data_path):
        if path.exists() and not force:
            print_error(f"{path.name} already exists. Use --force to overwrite it.")
            return

    saved = ConfigRepository().save(config_path, config)
    if isinstance(saved, Err):
        print_error(saved.error)
        raise typer.Exit(1)

    saved = DocumentRepository().save(data_path, document)
    if isinstance(saved, Err):
        print_error(saved.error)
        raise typer.Exit(1)

    print_success(f'Initialized sprint-tracker for "{config.project_name}"')
    typer.echo(f"  Created: {CONFIG_FILE_NAME}")
    typer.echo(f"  Created: {config.data_file}")
    typer.echo("\nNext steps:")
    typer.echo('  sprint add "My first task"    # Add a task')
    typer.echo("  sprint board                  # View the board")


def show_help() -> None:
    """Show usage overview."""
    typer.echo(HELP_TEXT)
