"""Sprint domain - the sprint document and board calculations.

Key Types:
    Task - A unit of work on the board
    TechDebt - A tracked technical-debt item
    Capacity - Sprint capacity in hours
    SprintDocument - The whole sprint data file
    ProjectConfig - Contents of .sprint-tracker.json
    SprintStats - Point totals and progress

Board Functions:
    active_tasks - Tasks in the current sprint
    group_by_column - Partition tasks into board columns
    blocked_tasks - Tasks with blockers
    compute_stats - Done/total points and progress
    next_task_id - Generate the next task id for a prefix
"""

from .board import (
    SprintStats,
    active_tasks,
    blocked_tasks,
    compute_stats,
    count_by_status,
    find_task,
    group_by_column,
    next_task_id,
    round_half_up,
    row_count,
)
from .models import (
    CONFIG_FILE_NAME,
    DEFAULT_BOARD_FILE,
    DEFAULT_COLUMNS,
    DEFAULT_DATA_FILE,
    DEFAULT_TASK_PREFIX,
    DOCUMENT_VERSION,
    DONE_STATUS,
    EDITABLE_FIELDS,
    Capacity,
    GithubProjectConfig,
    ProjectConfig,
    SprintDocument,
    Task,
    TechDebt,
    coerce_points,
)

__all__ = [
    # Models
    "Task",
    "TechDebt",
    "Capacity",
    "SprintDocument",
    "ProjectConfig",
    "GithubProjectConfig",
    "coerce_points",
    # Constants
    "CONFIG_FILE_NAME",
    "DEFAULT_DATA_FILE",
    "DEFAULT_BOARD_FILE",
    "DEFAULT_TASK_PREFIX",
    "DOCUMENT_VERSION",
    "DEFAULT_COLUMNS",
    "DONE_STATUS",
    "EDITABLE_FIELDS",
    # Board
    "SprintStats",
    "active_tasks",
    "group_by_column",
    "row_count",
    "blocked_tasks",
    "count_by_status",
    "find_task",
    "compute_stats",
    "round_half_up",
    "next_task_id",
]
