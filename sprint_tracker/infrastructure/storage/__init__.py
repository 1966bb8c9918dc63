"""Storage infrastructure for Sprint Tracker.

Whole-file persistence for the sprint document and the project config,
using Result monads for explicit error handling.
"""

from sprint_tracker.infrastructure.storage.json_storage import JsonStorage
from sprint_tracker.infrastructure.storage.repositories import (
    ConfigRepository,
    DocumentRepository,
    Workspace,
)

__all__ = [
    "JsonStorage",
    "DocumentRepository",
    "ConfigRepository",
    "Workspace",
]
