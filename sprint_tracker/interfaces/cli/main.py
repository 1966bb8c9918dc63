"""Entry point for the Sprint Tracker CLI.

Usage:
    python -m sprint_tracker.interfaces.cli.main

Or via installed entry point:
    sprint <command>
"""

from sprint_tracker.interfaces.cli import app


def main() -> None:
    """Run the Sprint Tracker CLI application."""
    app()


if __name__ == "__main__":
    main()
