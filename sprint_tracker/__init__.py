"""Sprint Tracker - file-backed kanban board and sprint tracking from the terminal."""

__version__ = "1.0.0"
