"""Task application service.

Single-item mutations of the sprint document: create, move and edit.
Every function validates first and only then touches the document, so an
``Err`` always means the document is unchanged. Persisting the document
is the caller's job.
"""

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from pydantic import BaseModel

from sprint_tracker.domain.shared import Err, Ok, Result
from sprint_tracker.domain.sprint import (
    DEFAULT_COLUMNS,
    DEFAULT_TASK_PREFIX,
    DONE_STATUS,
    EDITABLE_FIELDS,
    SprintDocument,
    Task,
    coerce_points,
    find_task,
    next_task_id,
)

logger = logging.getLogger(__name__)


class StatusChange(BaseModel):
    """Outcome of moving a task between columns."""

    task_id: str
    old_status: str
    new_status: str
    completed_at: date | None = None


class FieldChange(BaseModel):
    """Outcome of editing one task field."""

    task_id: str
    field: str
    old_value: Any = None
    new_value: Any = None


def create_task(
    document: SprintDocument,
    title: str,
    prefix: str = DEFAULT_TASK_PREFIX,
    today: date | None = None,
) -> Result[Task, str]:
    """Append a new backlog task to the current sprint.

    Args:
        document: Sprint document to add the task to.
        title: Task title; must not be blank.
        prefix: Id prefix, upper-cased before use.
        today: Creation date (defaults to today).

    Returns:
        Ok(Task) with the new task, or Err(str) if the title is blank.
    """
    title = title.strip()
    if not title:
        return Err('Usage: sprint add "Task title"')

    task = Task(
        id=next_task_id(document.tasks, prefix),
        title=title,
        type="feature",
        status="backlog",
        priority="medium",
        points=0,
        sprint=document.current_sprint,
        owner=None,
        created_at=today or date.today(),
    )
    document.tasks.append(task)
    logger.debug(f"Created {task.id} in sprint {task.sprint}")
    return Ok(task)


def move_task(
    document: SprintDocument,
    task_id: str,
    status: str,
    columns: Sequence[str] = DEFAULT_COLUMNS,
    today: date | None = None,
) -> Result[StatusChange, str]:
    """Move a task to another column.

    The first move into ``done`` stamps ``completed_at``; later moves never
    change or clear it.

    Args:
        document: Sprint document holding the task.
        task_id: Task id, matched case-insensitively.
        status: Target column; must be one of ``columns``.
        columns: Configured board columns.
        today: Completion date to stamp (defaults to today).

    Returns:
        Ok(StatusChange) on success, Err(str) for an unknown column or task.
    """
    if status not in columns:
        return Err(f"Invalid status. Use: {', '.join(columns)}")

    task = find_task(document.tasks, task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    old_status = task.status
    task.status = status
    if status == DONE_STATUS and task.completed_at is None:
        task.completed_at = today or date.today()

    logger.debug(f"Moved {task.id}: {old_status} -> {status}")
    return Ok(
        StatusChange(
            task_id=task.id,
            old_status=old_status,
            new_status=status,
            completed_at=task.completed_at,
        )
    )


def edit_task(
    document: SprintDocument,
    task_id: str,
    field: str,
    value: str,
) -> Result[FieldChange, str]:
    """Set one editable field of a task.

    ``points`` is parsed as an integer (0 when it does not parse); other
    fields are stored as given.

    Returns:
        Ok(FieldChange) with old and new values, or Err(str) when the task
        is unknown, the field is not editable, or the title would be blank.
    """
    task = find_task(document.tasks, task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    if field not in EDITABLE_FIELDS:
        return Err(f"Invalid field. Use: {', '.join(EDITABLE_FIELDS)}")

    new_value: Any = value
    if field == "points":
        new_value = coerce_points(value)
    elif field == "title" and not value.strip():
        return Err("Title cannot be empty")

    old_value = getattr(task, field)
    setattr(task, field, new_value)

    logger.debug(f"Edited {task.id}.{field}: {old_value!r} -> {new_value!r}")
    return Ok(
        FieldChange(
            task_id=task.id,
            field=field,
            old_value=old_value,
            new_value=new_value,
        )
    )
