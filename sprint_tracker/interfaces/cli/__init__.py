"""CLI interface for Sprint Tracker using Typer.

Usage:
    sprint init "My Project"    # Create config and data file
    sprint                      # Show the board
    sprint add "Fix login"      # Add a task
    sprint move TASK-001 done   # Move a task
    sprint push                 # Sync tasks to GitHub issues

The CLI is structured as:
- app: Main Typer application
- commands/: Command implementations (project, views, tasks, sync)
- common.py: Shared loading and output helpers
- render.py: Terminal and markdown renderers
- main.py: Entry point that runs the app
"""

import logging

import typer

from sprint_tracker import __version__
from sprint_tracker.interfaces.cli.commands import project, sync, tasks, views
from sprint_tracker.interfaces.cli.common import CliState

app = typer.Typer(
    name="sprint",
    help="Lightweight sprint and task tracking from the terminal",
    add_completion=False,
    invoke_without_command=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sprint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr",
        envvar="SPRINT_VERBOSE",
    ),
) -> None:
    """Sprint Tracker - kanban board and sprint tracking in a JSON file.

    Runs 'board' when no command is given.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(CliState)

    if ctx.invoked_subcommand is None:
        views.board(ctx)


# =============================================================================
# Register Commands
# =============================================================================

app.command("init")(project.init)
app.command("help")(project.show_help)

app.command("board")(views.board)
app.command("status")(views.status)
app.command("list")(views.list_tasks)
app.command("show")(views.show)
app.command("debt")(views.debt)
app.command("generate")(views.generate)

app.command("add")(tasks.add)
app.command("move")(tasks.move)
app.command("edit")(tasks.edit)

app.command("push")(sync.push)
app.command("pull")(sync.pull)
app.command("link")(sync.link)


__all__ = ["app"]
