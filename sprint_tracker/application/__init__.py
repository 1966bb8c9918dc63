"""Application service layer for Sprint Tracker.

Services orchestrate domain operations on an in-memory sprint document.
They never read or write files; the CLI loads and saves around them.

Services:
    project_service - Initial config and document for a new project
    task_service - Single-item mutations (create, move, edit)
    sync_service - GitHub issue push/pull and manual linking

Example usage:
    >>> from sprint_tracker.application import create_task
    >>> result = create_task(document, "Implement login")
    >>> if isinstance(result, Ok):
    ...     print(result.value.id)
"""

from sprint_tracker.application.project_service import create_project
from sprint_tracker.application.sync_service import (
    CreatedEntry,
    CreatedIssue,
    IssueState,
    IssueTracker,
    PullResult,
    PushResult,
    RepoRef,
    SyncError,
    SyncScope,
    SyncService,
    UpdatedEntry,
    build_issue_body,
    build_labels,
    link_issue,
)
from sprint_tracker.application.task_service import (
    FieldChange,
    StatusChange,
    create_task,
    edit_task,
    move_task,
)

__all__ = [
    # Project service
    "create_project",
    # Task service
    "create_task",
    "move_task",
    "edit_task",
    "StatusChange",
    "FieldChange",
    # Sync service
    "SyncService",
    "SyncScope",
    "IssueTracker",
    "RepoRef",
    "CreatedIssue",
    "IssueState",
    "PushResult",
    "PullResult",
    "CreatedEntry",
    "UpdatedEntry",
    "SyncError",
    "build_issue_body",
    "build_labels",
    "link_issue",
]
