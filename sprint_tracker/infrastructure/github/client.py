"""GitHub CLI wrapper with Result-based error handling.

Implements the IssueTracker interface used by the sync service by
shelling out to ``gh`` (and ``git`` for the remote URL). Each operation
is one blocking subprocess call with no timeout and no retry.
"""

import json
import logging
import re
import subprocess
from pathlib import Path

from pydantic import ValidationError

from sprint_tracker.application.sync_service import CreatedIssue, IssueState, RepoRef
from sprint_tracker.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

_REMOTE_RE = re.compile(r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$")
_ISSUE_NUMBER_RE = re.compile(r"/issues/(\d+)")

# gh returns 30 project items unless a limit is given.
PROJECT_ITEM_LIMIT = 1000


def parse_remote_url(url: str) -> RepoRef | None:
    """Extract owner/repo from an https or ssh GitHub remote URL."""
    match = _REMOTE_RE.search(url.strip())
    if not match:
        return None
    return RepoRef(owner=match.group(1), name=match.group(2))


class GhClient:
    """GitHub operations through the ``gh`` command-line client.

    Example:
        gh = GhClient(cwd=Path("/path/to/repo"))
        repo = gh.get_repo()
        if repo is not None:
            result = gh.get_issue(repo, 42)
            if isinstance(result, Ok) and result.value.is_closed:
                ...
    """

    def __init__(self, cwd: Path | None = None, executable: str = "gh") -> None:
        """Initialize the client.

        Args:
            cwd: Working directory for git/gh commands (default: current).
            executable: Name or path of the gh binary.
        """
        self._cwd = cwd
        self._gh = executable

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        logger.debug(f"Running: {' '.join(args)}")
        return subprocess.run(
            args,
            cwd=str(self._cwd) if self._cwd else None,
            capture_output=True,
            text=True,
        )

    def _gh_call(self, args: list[str], action: str) -> Result[str, str]:
        """Run a gh subcommand and return its stdout."""
        try:
            result = self._run([self._gh, *args])
        except OSError as e:
            return Err(f"Failed to {action}: {e}")

        if result.returncode != 0:
            return Err(f"Failed to {action}: {result.stderr.strip() or 'gh exited with an error'}")
        return Ok(result.stdout)

    def is_available(self) -> bool:
        """Check that the gh binary can be executed."""
        try:
            return self._run([self._gh, "--version"]).returncode == 0
        except OSError:
            return False

    def get_repo(self) -> RepoRef | None:
        """Resolve owner/repo from the ``origin`` remote, if it is on GitHub."""
        try:
            result = self._run(["git", "remote", "get-url", "origin"])
        except OSError as e:
            logger.debug(f"git not available: {e}")
            return None

        if result.returncode != 0:
            return None
        return parse_remote_url(result.stdout)

    def create_issue(
        self,
        repo: RepoRef,
        title: str,
        body: str,
        labels: list[str],
    ) -> Result[CreatedIssue, str]:
        """Create an issue and return its number and URL."""
        args = ["issue", "create", "--repo", repo.full_name, "--title", title, "--body", body]
        if labels:
            args.extend(["--label", ",".join(labels)])

        result = self._gh_call(args, "create issue")
        if isinstance(result, Err):
            return result

        url = result.value.strip().splitlines()[-1] if result.value.strip() else ""
        match = _ISSUE_NUMBER_RE.search(url)
        if not match:
            return Err(f"Unexpected output from gh issue create: {result.value.strip()!r}")
        return Ok(CreatedIssue(number=int(match.group(1)), url=url))

    def close_issue(self, repo: RepoRef, number: int) -> Result[None, str]:
        result = self._gh_call(
            ["issue", "close", str(number), "--repo", repo.full_name],
            f"close issue #{number}",
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    def reopen_issue(self, repo: RepoRef, number: int) -> Result[None, str]:
        result = self._gh_call(
            ["issue", "reopen", str(number), "--repo", repo.full_name],
            f"reopen issue #{number}",
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    def get_issue(self, repo: RepoRef, number: int) -> Result[IssueState, str]:
        """Fetch an issue's state (OPEN/CLOSED) and title."""
        result = self._gh_call(
            ["issue", "view", str(number), "--repo", repo.full_name, "--json", "state,title"],
            f"view issue #{number}",
        )
        if isinstance(result, Err):
            return result

        try:
            return Ok(IssueState.model_validate(json.loads(result.value)))
        except (json.JSONDecodeError, ValidationError) as e:
            return Err(f"Unexpected data for issue #{number}: {e}")

    def ensure_label(self, repo: RepoRef, label: str) -> None:
        """Create a label; failures (usually "already exists") are ignored."""
        result = self._gh_call(["label", "create", label, "--repo", repo.full_name], "create label")
        if isinstance(result, Err):
            logger.debug(f"Label {label!r} not created: {result.error}")

    def add_to_project(self, project_number: int, owner: str, url: str) -> Result[None, str]:
        result = self._gh_call(
            ["project", "item-add", str(project_number), "--owner", owner, "--url", url],
            f"add item to project #{project_number}",
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    def list_project_items(self, project_number: int, owner: str) -> Result[list[str], str]:
        """List the content URLs of all items on a project board."""
        result = self._gh_call(
            [
                "project",
                "item-list",
                str(project_number),
                "--owner",
                owner,
                "--format",
                "json",
                "--limit",
                str(PROJECT_ITEM_LIMIT),
            ],
            f"list project #{project_number}",
        )
        if isinstance(result, Err):
            return result

        try:
            data = json.loads(result.value)
        except json.JSONDecodeError as e:
            return Err(f"Unexpected data for project #{project_number}: {e}")

        urls: list[str] = []
        for item in data.get("items", []):
            content = item.get("content") or {}
            if content.get("url"):
                urls.append(content["url"])
        return Ok(urls)
