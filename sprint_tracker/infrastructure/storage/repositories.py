"""Repositories for the sprint document and the project config.

Both wrap JsonStorage and validate data once, at load time, returning
Result types for explicit error handling.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from sprint_tracker.domain.shared.result import Err, Ok, Result
from sprint_tracker.domain.sprint.models import (
    CONFIG_FILE_NAME,
    ProjectConfig,
    SprintDocument,
)
from sprint_tracker.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Workspace:
    """A project config together with the directory it was found in.

    Attributes:
        config: Parsed config (defaults when no config file exists).
        root: Directory that relative file names resolve against.
        config_path: The config file, or None when running without one.
    """

    config: ProjectConfig
    root: Path
    config_path: Path | None = None

    @property
    def data_path(self) -> Path:
        return self.root / self.config.data_file

    @property
    def board_path(self) -> Path:
        return self.root / self.config.board_file

    @property
    def columns(self) -> list[str]:
        return list(self.config.columns)


class DocumentRepository:
    """Persistence for the sprint document.

    The document is always read and written as a whole. Saving stamps
    ``last_updated``.
    """

    def __init__(
        self,
        storage: JsonStorage | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the repository.

        Args:
            storage: JsonStorage instance to use. Creates new one if not provided.
            clock: Source of the ``last_updated`` timestamp.
        """
        self._storage = storage or JsonStorage()
        self._clock = clock

    def load(self, path: Path) -> Result[SprintDocument, str]:
        """Load and validate the sprint document at ``path``."""
        result = self._storage.load_json(path)
        if isinstance(result, Err):
            return result

        try:
            document = SprintDocument.model_validate(result.value)
        except ValidationError as e:
            return Err(f"Invalid sprint data in {path}: {e}")

        logger.debug(f"Loaded {len(document.tasks)} tasks from {path}")
        return Ok(document)

    def save(self, path: Path, document: SprintDocument) -> Result[None, str]:
        """Write the whole document to ``path``, replacing the file."""
        document.last_updated = self._clock()
        data = document.model_dump(mode="json", by_alias=True)
        logger.debug(f"Saving {len(document.tasks)} tasks to {path}")
        return self._storage.save_json(path, data)

    def exists(self, path: Path) -> bool:
        return path.exists()


class ConfigRepository:
    """Discovery and persistence of ``.sprint-tracker.json``."""

    def __init__(self, storage: JsonStorage | None = None) -> None:
        self._storage = storage or JsonStorage()

    def discover(self, start: Path) -> Result[Workspace, str]:
        """Find the nearest config file at or above ``start``.

        Walks from ``start`` through each parent up to the filesystem root.
        When no config exists, returns a workspace with default settings
        rooted at ``start``.

        Returns:
            Ok(Workspace), or Err(str) if a config file was found but is
            unreadable or invalid.
        """
        start = start.resolve()
        for directory in (start, *start.parents):
            candidate = directory / CONFIG_FILE_NAME
            if candidate.is_file():
                logger.debug(f"Using config {candidate}")
                return self.load(candidate)

        logger.debug(f"No {CONFIG_FILE_NAME} found above {start}, using defaults")
        return Ok(Workspace(config=ProjectConfig(), root=start))

    def load(self, path: Path) -> Result[Workspace, str]:
        result = self._storage.load_json(path)
        if isinstance(result, Err):
            return result

        try:
            config = ProjectConfig.model_validate(result.value)
        except ValidationError as e:
            return Err(f"Invalid config in {path}: {e}")

        return Ok(Workspace(config=config, root=path.parent, config_path=path))

    def save(self, path: Path, config: ProjectConfig) -> Result[None, str]:
        data = config.model_dump(mode="json", by_alias=True)
        return self._storage.save_json(path, data)
