"""Sprint Tracker CLI.

Re-exports the Typer app so ``python -m sprint_tracker.cli`` works.
"""

from sprint_tracker.interfaces.cli import app
from sprint_tracker.interfaces.cli.main import main

__all__ = ["app", "main"]

if __name__ == "__main__":
    main()
