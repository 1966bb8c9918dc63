"""Project application service.

Builds the initial config and sprint document for ``sprint init``.
All functions are pure - no I/O, no side effects.
"""

from datetime import date, datetime, timedelta

from sprint_tracker.domain.shared import Err, Ok, Result
from sprint_tracker.domain.sprint import (
    DEFAULT_BOARD_FILE,
    DEFAULT_COLUMNS,
    DEFAULT_DATA_FILE,
    Capacity,
    ProjectConfig,
    SprintDocument,
)

SPRINT_LENGTH_DAYS = 14
DEFAULT_CAPACITY = Capacity(total_hours=80, committed=64, buffer=16)


def create_project(
    name: str,
    today: date,
    now: datetime,
) -> Result[tuple[ProjectConfig, SprintDocument], str]:
    """Create the config and an empty first-sprint document.

    Args:
        name: Human-readable project name.
        today: Start date of sprint 1.
        now: Creation timestamp recorded in the config.

    Returns:
        Ok((ProjectConfig, SprintDocument)) on success, or
        Err(str) if the name is blank.
    """
    name = name.strip()
    if not name:
        return Err("Project name cannot be empty")

    config = ProjectConfig(
        project_name=name,
        data_file=DEFAULT_DATA_FILE,
        board_file=DEFAULT_BOARD_FILE,
        columns=list(DEFAULT_COLUMNS),
        created=now,
    )
    document = SprintDocument(
        project=name,
        current_sprint="1",
        sprint_start=today,
        sprint_end=today + timedelta(days=SPRINT_LENGTH_DAYS),
        capacity=DEFAULT_CAPACITY.model_copy(),
        tasks=[],
        technical_debt=[],
        last_updated=now,
    )
    return Ok((config, document))
