"""Sprint document models.

Pure data structures for the sprint data file and the project config.
Uses Pydantic so the JSON document is validated once, when it is loaded,
instead of being checked field by field wherever it is read.

JSON keys are camelCase (``currentSprint``, ``acceptanceCriteria``);
Python attributes are snake_case. Keys the models do not know about are
kept as extras so a load/save cycle never drops data.
"""

from datetime import date, datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)
from pydantic.alias_generators import to_camel

# =============================================================================
# Constants
# =============================================================================

CONFIG_FILE_NAME = ".sprint-tracker.json"
DEFAULT_DATA_FILE = "sprint-data.json"
DEFAULT_BOARD_FILE = "SPRINT_BOARD.md"
DEFAULT_TASK_PREFIX = "TASK"
DOCUMENT_VERSION = "1.0.0"

DEFAULT_COLUMNS: tuple[str, ...] = ("backlog", "ready", "in_progress", "review", "done")
DONE_STATUS = "done"

# Fields that `sprint edit` may change. Everything else is either managed
# by a dedicated command (status, github link) or immutable (id, createdAt).
EDITABLE_FIELDS: tuple[str, ...] = (
    "title",
    "type",
    "priority",
    "points",
    "owner",
    "branch",
    "sprint",
    "notes",
)


def coerce_points(value: Any) -> int:
    """Coerce story points input to a non-negative integer.

    Integers pass through, numeric strings are parsed, and anything else
    becomes 0 rather than an error.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        points = value
    elif isinstance(value, float) and value.is_integer():
        points = int(value)
    else:
        try:
            points = int(str(value).strip())
        except ValueError:
            return 0
    return max(points, 0)


class _DocumentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @model_serializer(mode="wrap")
    def omit_unset_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """Drop declared fields that are None. Unknown keys are written as read."""
        data = handler(self)
        for name, field in type(self).model_fields.items():
            for key in {name, field.alias or name}:
                if key in data and data[key] is None:
                    del data[key]
        return data


# =============================================================================
# Sprint document
# =============================================================================


class Task(_DocumentModel):
    """A unit of work on the board.

    ``status`` is normally one of the configured columns; a task whose
    status matches no column is still stored and listed, it just does not
    appear in the board grid.
    """

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    type: str = "feature"
    status: str = "backlog"
    priority: str = "medium"
    points: int = 0
    sprint: str = ""
    owner: str | None = None
    branch: str | None = None
    worktree: str | None = None
    notes: str | None = None
    linked_td: str | None = Field(default=None, alias="linkedTD")
    acceptance_criteria: list[str] = Field(default_factory=list)
    blockers: list[str] = Field(default_factory=list)
    created_at: date | None = None
    completed_at: date | None = None
    github_issue: int | None = None
    github_url: str | None = None

    @field_validator("points", mode="before")
    @classmethod
    def parse_points(cls, value: Any) -> int:
        return coerce_points(value)

    @field_validator("sprint", mode="before")
    @classmethod
    def sprint_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def is_linked(self) -> bool:
        return self.github_issue is not None


class TechDebt(_DocumentModel):
    """A tracked piece of technical debt with a completion percentage."""

    id: str
    title: str | None = None
    status: str = "open"
    progress: int = 0
    linked_task: str | None = None

    @field_validator("progress", mode="before")
    @classmethod
    def clamp_progress(cls, value: Any) -> int:
        return min(coerce_points(value), 100)


class Capacity(_DocumentModel):
    """Sprint capacity in hours. Informational only."""

    total_hours: float = Field(default=0, ge=0)
    committed: float = Field(default=0, ge=0)
    buffer: float = Field(default=0, ge=0)


class SprintDocument(_DocumentModel):
    """The whole sprint data file.

    The document is the unit of persistence: it is loaded completely,
    mutated in memory, and written back completely.
    """

    project: str = ""
    version: str = DOCUMENT_VERSION
    current_sprint: str = "1"
    sprint_start: date | None = None
    sprint_end: date | None = None
    capacity: Capacity = Field(default_factory=Capacity)
    tasks: list[Task] = Field(default_factory=list)
    technical_debt: list[TechDebt] = Field(default_factory=list)
    last_updated: datetime | None = None

    @field_validator("current_sprint", mode="before")
    @classmethod
    def sprint_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


# =============================================================================
# Project configuration
# =============================================================================


class GithubProjectConfig(_DocumentModel):
    """GitHub project board that newly created issues are added to."""

    number: int


class ProjectConfig(_DocumentModel):
    """Contents of ``.sprint-tracker.json``."""

    project_name: str = ""
    data_file: str = DEFAULT_DATA_FILE
    board_file: str = DEFAULT_BOARD_FILE
    task_prefix: str = DEFAULT_TASK_PREFIX
    columns: list[str] = Field(default_factory=lambda: list(DEFAULT_COLUMNS), min_length=1)
    created: datetime | None = None
    github_project: GithubProjectConfig | None = None
