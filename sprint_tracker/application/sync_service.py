"""Issue tracker synchronisation service.

Reconciles task status with linked GitHub issues in both directions:

- push: local -> GitHub. Creates issues for unlinked tasks and closes or
  reopens linked issues whose state disagrees with the task.
- pull: GitHub -> local. Marks tasks done when their issue was closed.
  An issue that is open while its task is done only produces a warning;
  reopening work needs a human decision.

The tracker client is injected (see ``IssueTracker``) so the service can
be exercised with a fake. Calls are made one at a time, in task order.
Preconditions are checked once per batch; after that a failure for one
task is recorded and the batch moves on. The service mutates the
document but never saves it.
"""

import logging
from datetime import date
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from sprint_tracker.domain.shared import Err, Ok, Result
from sprint_tracker.domain.sprint import (
    DONE_STATUS,
    SprintDocument,
    Task,
    active_tasks,
    find_task,
)

logger = logging.getLogger(__name__)

GH_NOT_FOUND = "GitHub CLI (gh) not found. Install from https://cli.github.com"
NO_GITHUB_REMOTE = "Not in a git repository with GitHub remote"


# =============================================================================
# Tracker interface
# =============================================================================


class RepoRef(BaseModel):
    """A GitHub repository, parsed from the git remote."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def issue_url(self, number: int) -> str:
        return f"https://github.com/{self.full_name}/issues/{number}"


class CreatedIssue(BaseModel):
    number: int
    url: str


class IssueState(BaseModel):
    """State of an issue as reported by the tracker."""

    state: str
    title: str = ""

    @property
    def is_closed(self) -> bool:
        return self.state.upper() == "CLOSED"


class IssueTracker(Protocol):
    """Operations the sync service needs from an issue tracker client."""

    def is_available(self) -> bool: ...

    def get_repo(self) -> RepoRef | None: ...

    def create_issue(
        self, repo: RepoRef, title: str, body: str, labels: list[str]
    ) -> Result[CreatedIssue, str]: ...

    def close_issue(self, repo: RepoRef, number: int) -> Result[None, str]: ...

    def reopen_issue(self, repo: RepoRef, number: int) -> Result[None, str]: ...

    def get_issue(self, repo: RepoRef, number: int) -> Result[IssueState, str]: ...

    def ensure_label(self, repo: RepoRef, label: str) -> None: ...

    def add_to_project(self, project_number: int, owner: str, url: str) -> Result[None, str]: ...


# =============================================================================
# Results
# =============================================================================


class SyncScope(BaseModel):
    """Which tasks a push covers."""

    sprint_only: bool = True
    status: str | None = None


class CreatedEntry(BaseModel):
    task_id: str
    issue: int
    url: str


class UpdatedEntry(BaseModel):
    task_id: str
    action: str


class SyncError(BaseModel):
    task_id: str
    error: str


class PushResult(BaseModel):
    """Outcome of a push.

    ``in_sync`` lists linked tasks that needed no change; they are not
    counted as updates.
    """

    repo: RepoRef
    created: list[CreatedEntry] = Field(default_factory=list)
    updated: list[UpdatedEntry] = Field(default_factory=list)
    errors: list[SyncError] = Field(default_factory=list)
    in_sync: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class PullResult(BaseModel):
    repo: RepoRef
    updated: list[UpdatedEntry] = Field(default_factory=list)
    errors: list[SyncError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


# =============================================================================
# Issue content
# =============================================================================


def build_labels(task: Task) -> list[str]:
    """Labels for a new issue.

    Only critical and high priorities get a priority label.
    """
    labels: list[str] = []
    if task.priority in ("critical", "high"):
        labels.append(f"priority:{task.priority}")
    if task.type:
        labels.append(f"type:{task.type}")
    return labels


def build_issue_body(task: Task) -> str:
    """Render the markdown body of a new issue from task fields."""
    lines = [
        f"## Task: {task.id}",
        "",
        f"**Type:** {task.type or 'feature'}",
        f"**Priority:** {task.priority or 'medium'}",
        f"**Points:** {task.points}",
        f"**Sprint:** {task.sprint}",
    ]
    if task.owner:
        lines.append(f"**Assigned:** {task.owner}")
    if task.branch:
        lines.append(f"**Branch:** `{task.branch}`")
    if task.linked_td:
        lines.append(f"**Tech Debt:** {task.linked_td}")

    if task.acceptance_criteria:
        lines.extend(["", "### Acceptance Criteria", ""])
        lines.extend(f"- [ ] {criterion}" for criterion in task.acceptance_criteria)

    if task.notes:
        lines.extend(["", "### Notes", "", task.notes])

    lines.extend(["", "---", "*Created by sprint-tracker*"])
    return "\n".join(lines)


def select_tasks(document: SprintDocument, scope: SyncScope) -> list[Task]:
    tasks = active_tasks(document) if scope.sprint_only else list(document.tasks)
    if scope.status:
        tasks = [t for t in tasks if t.status == scope.status]
    return tasks


def link_issue(
    document: SprintDocument,
    task_id: str,
    issue_number: int,
    repo: RepoRef | None = None,
) -> Result[Task, str]:
    """Associate a task with an existing issue without contacting GitHub.

    The issue URL is filled in when the repository is known; otherwise
    only the number is stored.
    """
    if issue_number <= 0:
        return Err("Usage: sprint link <task-id> <issue-number>")

    task = find_task(document.tasks, task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    task.github_issue = issue_number
    task.github_url = repo.issue_url(issue_number) if repo else None
    return Ok(task)


# =============================================================================
# Service
# =============================================================================


class SyncService:
    """Push and pull task status against an issue tracker.

    Example:
        service = SyncService(GhClient(cwd=root))
        result = service.push(document)
        if isinstance(result, Ok):
            print(len(result.value.created))
    """

    def __init__(self, tracker: IssueTracker) -> None:
        self._tracker = tracker

    def check_ready(self) -> Result[RepoRef, str]:
        """Verify the tracker client is installed and a GitHub remote exists."""
        if not self._tracker.is_available():
            return Err(GH_NOT_FOUND)
        repo = self._tracker.get_repo()
        if repo is None:
            return Err(NO_GITHUB_REMOTE)
        return Ok(repo)

    def push(
        self,
        document: SprintDocument,
        scope: SyncScope | None = None,
        project_number: int | None = None,
    ) -> Result[PushResult, str]:
        """Create or update issues for the selected tasks.

        Args:
            document: Sprint document; new issue numbers are written to it.
            scope: Task selection (default: current sprint only).
            project_number: GitHub project board that newly created issues
                are added to, if any. Linked issues are never re-added.

        Returns:
            Ok(PushResult), or Err(str) when a precondition fails, in which
            case no task was processed.
        """
        ready = self.check_ready()
        if isinstance(ready, Err):
            return ready
        repo = ready.value

        result = PushResult(repo=repo)

        for task in select_tasks(document, scope or SyncScope()):
            try:
                if task.github_issue is not None:
                    self._push_linked(task, task.github_issue, repo, result)
                else:
                    self._push_new(task, repo, project_number, result)
            except Exception as e:
                logger.debug(f"Push failed for {task.id}: {e}")
                result.errors.append(SyncError(task_id=task.id, error=str(e)))

        return Ok(result)

    def pull(self, document: SprintDocument, today: date | None = None) -> Result[PullResult, str]:
        """Mark tasks done whose linked issue has been closed.

        Args:
            document: Sprint document to update in place.
            today: Completion date to stamp (defaults to today).

        Returns:
            Ok(PullResult), or Err(str) when a precondition fails.
        """
        ready = self.check_ready()
        if isinstance(ready, Err):
            return ready
        repo = ready.value

        result = PullResult(repo=repo)
        for task in document.tasks:
            if task.github_issue is None:
                continue
            try:
                self._pull_task(task, task.github_issue, repo, today or date.today(), result)
            except Exception as e:
                logger.debug(f"Pull failed for {task.id}: {e}")
                result.errors.append(SyncError(task_id=task.id, error=str(e)))

        return Ok(result)

    # -------------------- push --------------------

    def _push_new(
        self,
        task: Task,
        repo: RepoRef,
        project_number: int | None,
        result: PushResult,
    ) -> None:
        labels = build_labels(task)
        for label in labels:
            self._tracker.ensure_label(repo, label)

        logger.debug(f"Creating issue for {task.id} in {repo.full_name}")
        created = self._tracker.create_issue(
            repo, f"{task.id}: {task.title}", build_issue_body(task), labels
        )
        if isinstance(created, Err):
            result.errors.append(
                SyncError(task_id=task.id, error=f"Failed to create issue: {created.error}")
            )
            return

        issue = created.value
        task.github_issue = issue.number
        task.github_url = issue.url
        result.created.append(CreatedEntry(task_id=task.id, issue=issue.number, url=issue.url))

        if project_number is not None:
            added = self._tracker.add_to_project(project_number, repo.owner, issue.url)
            if isinstance(added, Err):
                result.warnings.append(
                    f"{task.id}: could not add issue #{issue.number} "
                    f"to project #{project_number}: {added.error}"
                )

        if task.status == DONE_STATUS:
            closed = self._tracker.close_issue(repo, issue.number)
            if isinstance(closed, Err):
                result.warnings.append(
                    f"{task.id}: created issue #{issue.number} but could not close it: {closed.error}"
                )

    def _push_linked(self, task: Task, number: int, repo: RepoRef, result: PushResult) -> None:
        fetched = self._tracker.get_issue(repo, number)
        if isinstance(fetched, Err):
            result.errors.append(SyncError(task_id=task.id, error=fetched.error))
            return

        issue_closed = fetched.value.is_closed
        task_done = task.status == DONE_STATUS

        if task_done and not issue_closed:
            outcome = self._tracker.close_issue(repo, number)
            verb, action = "close", "closed"
        elif not task_done and issue_closed:
            outcome = self._tracker.reopen_issue(repo, number)
            verb, action = "reopen", "reopened"
        else:
            result.in_sync.append(task.id)
            return

        if isinstance(outcome, Err):
            result.errors.append(
                SyncError(task_id=task.id, error=f"Failed to {verb} issue #{number}: {outcome.error}")
            )
            return
        result.updated.append(UpdatedEntry(task_id=task.id, action=action))

    # -------------------- pull --------------------

    def _pull_task(
        self,
        task: Task,
        number: int,
        repo: RepoRef,
        today: date,
        result: PullResult,
    ) -> None:
        fetched = self._tracker.get_issue(repo, number)
        if isinstance(fetched, Err):
            result.errors.append(SyncError(task_id=task.id, error=fetched.error))
            return

        issue_closed = fetched.value.is_closed
        task_done = task.status == DONE_STATUS

        if issue_closed and not task_done:
            task.status = DONE_STATUS
            if task.completed_at is None:
                task.completed_at = today
            result.updated.append(UpdatedEntry(task_id=task.id, action="marked done"))
        elif not issue_closed and task_done:
            result.warnings.append(f"{task.id} is done but issue #{number} is open")
