"""CLI commands for Sprint Tracker.

Each module provides plain functions that are registered as top-level
commands on the main Typer app:

- project: init, help
- views: board, status, list, show, debt, generate
- tasks: add, move, edit
- sync: push, pull, link
"""

from sprint_tracker.interfaces.cli.commands import project, sync, tasks, views

__all__ = ["project", "views", "tasks", "sync"]
