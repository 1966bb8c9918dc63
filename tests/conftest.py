"""Shared test fixtures for Sprint Tracker tests."""

import subprocess
from datetime import date

import pytest

from sprint_tracker.application.sync_service import CreatedIssue, IssueState, RepoRef
from sprint_tracker.domain.shared import Err, Ok
from sprint_tracker.domain.sprint import Capacity, SprintDocument, Task, TechDebt


class FakeTracker:
    """In-memory IssueTracker that records every call.

    Issues are numbered from 100. ``raise_for`` and ``fail_create_for``
    hold task ids whose issue creation raises or returns an Err;
    ``fail_view`` holds issue numbers whose lookup fails.
    """

    def __init__(self, available: bool = True, repo: RepoRef | None = None) -> None:
        self.available = available
        self.repo = repo if repo is not None else RepoRef(owner="acme", name="widgets")
        self.issues: dict[int, str] = {}
        self.calls: list[tuple] = []
        self.raise_for: set[str] = set()
        self.fail_create_for: set[str] = set()
        self.fail_view: set[int] = set()
        self._next_number = 100

    def is_available(self) -> bool:
        return self.available

    def get_repo(self) -> RepoRef | None:
        return self.repo

    def create_issue(self, repo, title, body, labels):
        self.calls.append(("create", title, tuple(labels)))
        task_id = title.split(":")[0]
        if task_id in self.raise_for:
            raise subprocess.CalledProcessError(1, ["gh", "issue", "create"])
        if task_id in self.fail_create_for:
            return Err("HTTP 502")
        number = self._next_number
        self._next_number += 1
        self.issues[number] = "OPEN"
        return Ok(CreatedIssue(number=number, url=repo.issue_url(number)))

    def close_issue(self, repo, number):
        self.calls.append(("close", number))
        self.issues[number] = "CLOSED"
        return Ok(None)

    def reopen_issue(self, repo, number):
        self.calls.append(("reopen", number))
        self.issues[number] = "OPEN"
        return Ok(None)

    def get_issue(self, repo, number):
        self.calls.append(("view", number))
        if number in self.fail_view or number not in self.issues:
            return Err(f"Failed to view issue #{number}: not found")
        return Ok(IssueState(state=self.issues[number], title=f"Issue {number}"))

    def ensure_label(self, repo, label):
        self.calls.append(("label", label))

    def add_to_project(self, project_number, owner, url):
        self.calls.append(("project-add", project_number, url))
        return Ok(None)


@pytest.fixture
def tracker() -> FakeTracker:
    return FakeTracker()


@pytest.fixture
def document() -> SprintDocument:
    """A sprint 1 document with tasks in several columns and one in sprint 2."""
    return SprintDocument(
        project="Widgets",
        current_sprint="1",
        sprint_start=date(2024, 3, 4),
        sprint_end=date(2024, 3, 18),
        capacity=Capacity(total_hours=80, committed=64, buffer=16),
        tasks=[
            Task(id="TASK-001", title="Login form", status="done", priority="high", points=3, sprint="1"),
            Task(id="TASK-002", title="Session store", status="in_progress", points=5, sprint="1"),
            Task(id="TASK-003", title="Docs", status="backlog", priority="low", points=0, sprint="1"),
            Task(id="TASK-004", title="Next sprint work", status="ready", points=8, sprint="2"),
        ],
        technical_debt=[
            TechDebt(id="TD-001", status="partial", progress=50, linked_task="TASK-002"),
            TechDebt(id="TD-002", status="closed", progress=100),
        ],
    )
