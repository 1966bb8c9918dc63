"""Unit tests for the terminal and markdown renderers."""

from datetime import UTC, datetime

from sprint_tracker.domain.sprint import DEFAULT_COLUMNS, SprintDocument, Task
from sprint_tracker.interfaces.cli.render import (
    column_title,
    pad_cell,
    progress_bar,
    render_board,
    render_debt,
    render_markdown_board,
    render_status,
    render_task_detail,
    render_task_list,
)


class TestHelpers:
    def test_pad_cell_pads(self):
        assert pad_cell("abc", 6) == "abc   "

    def test_pad_cell_truncates_from_the_left(self):
        assert pad_cell("TASK-001234", 8) == "TASK-001"

    def test_pad_cell_exact_width(self):
        assert pad_cell("abcd", 4) == "abcd"

    def test_column_title(self):
        assert column_title("in_progress") == "IN PROGRESS"

    def test_progress_bar(self):
        assert progress_bar(0) == "[" + "░" * 15 + "]"
        assert progress_bar(100) == "[" + "█" * 15 + "]"
        assert progress_bar(50) == "[" + "█" * 8 + "░" * 7 + "]"


class TestTerminalBoard:
    def test_columns_are_width_divided_by_count(self, document):
        output = render_board(document, DEFAULT_COLUMNS, color=False)

        header = "│".join(pad_cell(column_title(c), 16) for c in DEFAULT_COLUMNS)
        assert header in output.splitlines()

    def test_shows_only_current_sprint(self, document):
        output = render_board(document, DEFAULT_COLUMNS, color=False)

        assert "🟠 TASK-001" in output
        assert "🟡 TASK-002" in output
        assert "🟢 TASK-003" in output
        assert "TASK-004" not in output

    def test_progress_line(self, document):
        output = render_board(document, DEFAULT_COLUMNS, color=False)
        assert "Progress: 3/8 points (38%)" in output

    def test_row_places_tasks_under_their_columns(self, document):
        lines = render_board(document, DEFAULT_COLUMNS, color=False).splitlines()

        row = next(line for line in lines if "TASK-003" in line)
        cells = row.split("│")
        assert len(cells) == 5
        assert cells[0].startswith("🟢 TASK-003")
        assert cells[2].startswith("🟡 TASK-002")
        assert cells[4].startswith("🟠 TASK-001")

    def test_empty_document_renders_chrome(self):
        document = SprintDocument(project="Empty", current_sprint="1")

        lines = render_board(document, DEFAULT_COLUMNS, color=False).splitlines()

        assert "│".join([" " * 16] * 5) in lines
        assert "Progress: 0/0 points (0%)" in lines
        assert "BACKLOG" in "\n".join(lines)

    def test_unknown_priority_gets_neutral_icon(self):
        document = SprintDocument(
            current_sprint="1",
            tasks=[Task(id="TASK-001", title="x", priority="urgent", sprint="1")],
        )
        assert "⚪ TASK-001" in render_board(document, DEFAULT_COLUMNS, color=False)

    def test_unknown_status_not_in_grid(self):
        document = SprintDocument(
            current_sprint="1",
            tasks=[Task(id="TASK-001", title="Old", status="archived", sprint="1", points=2)],
        )

        board = render_board(document, DEFAULT_COLUMNS, color=False)

        assert "TASK-001" not in board
        assert "Progress: 0/2 points (0%)" in board
        assert "TASK-001" in render_task_list(document.tasks, color=False)

    def test_blockers_listed(self, document):
        document.tasks[1].blockers = ["waiting on review"]
        output = render_board(document, DEFAULT_COLUMNS, color=False)
        assert "Blockers: TASK-002" in output

    def test_custom_columns(self, document):
        output = render_board(document, ["backlog", "done"], color=False)

        assert pad_cell("BACKLOG", 40) + "│" + pad_cell("DONE", 40) in output.splitlines()
        assert "TASK-002" not in output

    def test_color_adds_ansi_codes(self, document):
        assert "\x1b[" in render_board(document, DEFAULT_COLUMNS, color=True)
        assert "\x1b[" not in render_board(document, DEFAULT_COLUMNS, color=False)


class TestMarkdownBoard:
    NOW = datetime(2024, 3, 5, 12, 0, tzinfo=UTC)

    def test_header_and_table(self, document):
        markdown = render_markdown_board(document, DEFAULT_COLUMNS, self.NOW)
        lines = markdown.splitlines()

        assert lines[0] == "# Sprint Board - Widgets"
        assert "**Sprint:** 1 | **Version:** 1.0.0" in lines
        assert "**Period:** 2024-03-04 → 2024-03-18" in lines
        assert "**Updated:** 2024-03-05T12:00:00+00:00" in lines
        assert "| BACKLOG | READY | IN PROGRESS | REVIEW | DONE |" in lines
        assert "|---|---|---|---|---|" in lines
        assert "| 🟢 **TASK-003** | | 🟡 **TASK-002** | | 🟠 **TASK-001** |" in lines

    def test_details_follow_list_order(self, document):
        document.tasks[0].branch = "feat/login"
        markdown = render_markdown_board(document, DEFAULT_COLUMNS, self.NOW)

        headings = [line for line in markdown.splitlines() if line.startswith("### ")]
        assert headings == [
            "### ✅ TASK-001: Login form",
            "### 🔄 TASK-002: Session store",
            "### ⬜ TASK-003: Docs",
        ]
        assert "- **Branch:** `feat/login`" in markdown
        assert "- **Owner:** unassigned" in markdown

    def test_summary(self, document):
        markdown = render_markdown_board(document, DEFAULT_COLUMNS, self.NOW)

        assert "- **Progress:** 3/8 points (38%)" in markdown
        assert "- **Capacity:** 64h / 80h" in markdown

    def test_empty_document_has_one_blank_row(self):
        document = SprintDocument(project="Empty")
        lines = render_markdown_board(document, DEFAULT_COLUMNS, self.NOW).splitlines()

        assert "| | | | | |" in lines
        assert "- **Progress:** 0/0 points (0%)" in lines


class TestOtherViews:
    def test_status_counts(self, document):
        output = render_status(document, color=False)

        assert f"{pad_cell('done:', 15)} 1 tasks" in output
        assert f"{pad_cell('in_progress:', 15)} 1 tasks" in output
        assert "Points: 3/8" in output
        assert "Capacity: 64h / 80h" in output

    def test_task_list(self, document):
        document.tasks[1].owner = "sam"
        document.tasks[1].branch = "feat/session"
        output = render_task_list(document.tasks[:2], color=False)

        assert "🟡 TASK-002 ✨ Session store" in output
        assert "[in_progress] │ 5 pts │ sam" in output
        assert "↳ feat/session" in output

    def test_empty_task_list(self):
        assert render_task_list([], color=False) == "No tasks found"

    def test_task_detail(self):
        task = Task(
            id="TASK-009",
            title="Export",
            type="bug",
            acceptanceCriteria=["CSV works", "JSON works"],
            blockers=["API"],
            notes="ask ops",
            githubIssue=4,
        )

        output = render_task_detail(task, color=False)

        assert "TASK-009: Export" in output
        assert "Type:     🐛 bug" in output
        assert "  1. CSV works" in output
        assert "  2. JSON works" in output
        assert "  • API" in output
        assert "Notes: ask ops" in output
        assert "Issue:    #4" in output

    def test_debt(self, document):
        output = render_debt(document, color=False)

        assert "🔄 TD-001 [partial]" in output
        assert "✅ TD-002 [closed]" in output
        assert "→ TASK-002" in output
        assert "50%" in output

    def test_no_debt(self):
        assert render_debt(SprintDocument(), color=False) == "No technical debt tracked"
