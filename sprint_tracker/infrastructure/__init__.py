"""Infrastructure layer for Sprint Tracker.

Clean interfaces for I/O: files on disk and the GitHub CLI, wrapped with
Result monads for explicit error handling.

Exports:
    Storage:
        - JsonStorage: Low-level JSON/text file I/O
        - DocumentRepository: Sprint document persistence
        - ConfigRepository: Config discovery and persistence
        - Workspace: Config plus resolved file paths

    GitHub:
        - GhClient: Issue tracker client backed by the gh CLI
"""

from sprint_tracker.infrastructure.github import GhClient, parse_remote_url
from sprint_tracker.infrastructure.storage import (
    ConfigRepository,
    DocumentRepository,
    JsonStorage,
    Workspace,
)

__all__ = [
    # Storage
    "JsonStorage",
    "DocumentRepository",
    "ConfigRepository",
    "Workspace",
    # GitHub
    "GhClient",
    "parse_remote_url",
]
