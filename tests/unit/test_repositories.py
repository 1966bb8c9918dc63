"""Unit tests for JSON storage and the document/config repositories."""

import json
from datetime import UTC, datetime, timedelta

from sprint_tracker.domain.shared import Err, Ok
from sprint_tracker.domain.sprint import ProjectConfig, SprintDocument
from sprint_tracker.infrastructure.storage import (
    ConfigRepository,
    DocumentRepository,
    JsonStorage,
)


class _Clock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class TestJsonStorage:
    def test_missing_file(self, tmp_path):
        result = JsonStorage().load_json(tmp_path / "nope.json")

        assert isinstance(result, Err)
        assert "File not found" in result.error

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        result = JsonStorage().load_json(path)

        assert isinstance(result, Err)
        assert result.error.startswith("Invalid JSON")

    def test_save_is_pretty_utf8(self, tmp_path):
        path = tmp_path / "out.json"

        assert JsonStorage().save_json(path, {"title": "Café ✨"}) == Ok(None)

        text = path.read_text(encoding="utf-8")
        assert text == '{\n  "title": "Café ✨"\n}\n'

    def test_save_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "board.md"

        JsonStorage().save_text(path, "# Board\n")

        assert path.read_text(encoding="utf-8") == "# Board\n"


class TestDocumentRepository:
    def test_round_trip_preserves_content(self, tmp_path, document):
        path = tmp_path / "sprint-data.json"
        repository = DocumentRepository(clock=_Clock(datetime(2024, 3, 5, tzinfo=UTC)))

        repository.save(path, document)
        loaded = repository.load(path).value

        original = document.model_dump(mode="json", by_alias=True, exclude={"last_updated"})
        reloaded = loaded.model_dump(mode="json", by_alias=True, exclude={"last_updated"})
        assert reloaded == original

    def test_last_updated_advances(self, tmp_path, document):
        path = tmp_path / "sprint-data.json"
        repository = DocumentRepository(clock=_Clock(datetime(2024, 3, 5, tzinfo=UTC)))

        repository.save(path, document)
        first_stamp = repository.load(path).value.last_updated
        repository.save(path, repository.load(path).value)
        second_stamp = repository.load(path).value.last_updated

        assert second_stamp > first_stamp

    def test_writes_camel_case_keys(self, tmp_path, document):
        path = tmp_path / "sprint-data.json"

        DocumentRepository().save(path, document)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["currentSprint"] == "1"
        assert data["capacity"]["totalHours"] == 80
        assert data["technicalDebt"][0]["linkedTask"] == "TASK-002"
        assert "lastUpdated" in data
        assert "owner" not in data["tasks"][0]

    def test_unknown_keys_survive(self, tmp_path):
        path = tmp_path / "sprint-data.json"
        path.write_text(
            json.dumps(
                {
                    "project": "X",
                    "currentSprint": "1",
                    "retroNotes": "keep me",
                    "tasks": [{"id": "TASK-001", "title": "a", "estimate": 4}],
                }
            ),
            encoding="utf-8",
        )
        repository = DocumentRepository()

        repository.save(path, repository.load(path).value)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["retroNotes"] == "keep me"
        assert data["tasks"][0]["estimate"] == 4

    def test_unknown_null_keys_survive(self, tmp_path):
        path = tmp_path / "sprint-data.json"
        path.write_text(
            json.dumps(
                {
                    "project": "X",
                    "estimateSource": None,
                    "tasks": [{"id": "TASK-001", "title": "a", "reviewer": None}],
                }
            ),
            encoding="utf-8",
        )
        repository = DocumentRepository()

        repository.save(path, repository.load(path).value)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert "estimateSource" in data and data["estimateSource"] is None
        assert "reviewer" in data["tasks"][0] and data["tasks"][0]["reviewer"] is None
        assert "owner" not in data["tasks"][0]

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "sprint-data.json"
        path.write_text(json.dumps({"tasks": [{"title": "no id"}]}), encoding="utf-8")

        result = DocumentRepository().load(path)

        assert isinstance(result, Err)
        assert result.error.startswith("Invalid sprint data")

    def test_loads_document_written_by_hand(self, tmp_path):
        path = tmp_path / "sprint-data.json"
        path.write_text(
            json.dumps(
                {
                    "project": "X",
                    "currentSprint": 2,
                    "sprintStart": "2024-03-04",
                    "tasks": [{"id": "TASK-001", "title": "a", "points": "3"}],
                }
            ),
            encoding="utf-8",
        )

        document = DocumentRepository().load(path).value

        assert isinstance(document, SprintDocument)
        assert document.current_sprint == "2"
        assert document.tasks[0].points == 3


class TestConfigRepository:
    def test_defaults_without_config(self, tmp_path):
        workspace = ConfigRepository().discover(tmp_path).value

        assert workspace.config_path is None
        assert workspace.root == tmp_path.resolve()
        assert workspace.data_path == tmp_path.resolve() / "sprint-data.json"

    def test_discovers_config_in_parent(self, tmp_path):
        config = ProjectConfig(project_name="X", data_file="data/sprint.json", columns=["todo", "done"])
        ConfigRepository().save(tmp_path / ".sprint-tracker.json", config)
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)

        workspace = ConfigRepository().discover(nested).value

        assert workspace.root == tmp_path.resolve()
        assert workspace.data_path == tmp_path.resolve() / "data" / "sprint.json"
        assert workspace.columns == ["todo", "done"]

    def test_invalid_config(self, tmp_path):
        (tmp_path / ".sprint-tracker.json").write_text("[1, 2", encoding="utf-8")

        result = ConfigRepository().discover(tmp_path)

        assert isinstance(result, Err)

    def test_config_saved_with_camel_case(self, tmp_path):
        path = tmp_path / ".sprint-tracker.json"

        ConfigRepository().save(path, ProjectConfig(project_name="X"))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["projectName"] == "X"
        assert data["taskPrefix"] == "TASK"
        assert "githubProject" not in data
