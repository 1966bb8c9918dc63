"""Pure board calculations.

All functions in this module are pure - no I/O, no side effects.
They take the sprint document (or its tasks) in and return data out;
the terminal and markdown renderers are both built on top of them.
"""

import math
import re
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from .models import DONE_STATUS, SprintDocument, Task

# =============================================================================
# Selection
# =============================================================================


def active_tasks(document: SprintDocument) -> list[Task]:
    """Tasks belonging to the document's current sprint, in list order."""
    return [t for t in document.tasks if t.sprint == document.current_sprint]


def group_by_column(
    tasks: Iterable[Task],
    columns: Sequence[str],
) -> dict[str, list[Task]]:
    """Partition tasks by status into the given columns.

    Every column gets an entry, even when empty. Tasks whose status
    matches no column are dropped.

    Args:
        tasks: Tasks to group, usually the active subset.
        columns: Ordered column names.

    Returns:
        Mapping of column name to tasks, in column order.
    """
    grouped: dict[str, list[Task]] = {col: [] for col in columns}
    for task in tasks:
        if task.status in grouped:
            grouped[task.status].append(task)
    return grouped


def row_count(grouped: dict[str, list[Task]]) -> int:
    """Number of grid rows needed: the tallest column, at least 1."""
    return max([len(tasks) for tasks in grouped.values()] + [1])


def blocked_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Tasks with at least one blocker, whatever their status."""
    return [t for t in tasks if t.blockers]


def count_by_status(tasks: Iterable[Task]) -> dict[str, int]:
    """Count tasks per status, in order of first appearance."""
    counts: dict[str, int] = {}
    for task in tasks:
        counts[task.status] = counts.get(task.status, 0) + 1
    return counts


def find_task(tasks: Iterable[Task], task_id: str) -> Task | None:
    """Find a task by id, ignoring case."""
    wanted = task_id.lower()
    for task in tasks:
        if task.id.lower() == wanted:
            return task
    return None


# =============================================================================
# Progress
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)."""
    return math.floor(value + 0.5)


class SprintStats(BaseModel):
    """Point totals for a set of tasks."""

    total_tasks: int
    done_points: int
    total_points: int

    @property
    def progress_percent(self) -> int:
        """Done points as a whole percentage of total points (0 when empty)."""
        if self.total_points == 0:
            return 0
        return round_half_up(self.done_points / self.total_points * 100)


def compute_stats(tasks: Sequence[Task]) -> SprintStats:
    return SprintStats(
        total_tasks=len(tasks),
        done_points=sum(t.points for t in tasks if t.status == DONE_STATUS),
        total_points=sum(t.points for t in tasks),
    )


# =============================================================================
# Identifiers
# =============================================================================


def next_task_id(tasks: Iterable[Task], prefix: str) -> str:
    """Generate the next id for a prefix, e.g. ``TASK-004``.

    Scans ids of the form ``<PREFIX>-<number>`` and returns one more than
    the highest number found (1 when none exist), zero-padded to three
    digits. Numbering is per prefix.
    """
    prefix = prefix.upper()
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    highest = 0
    for task in tasks:
        match = pattern.match(task.id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}-{highest + 1:03d}"
