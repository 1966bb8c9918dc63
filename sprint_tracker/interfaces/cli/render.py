"""Text renderers for the sprint document.

Every function returns a string; the commands decide where it goes
(stdout or the markdown board file). Terminal renderers take a ``color``
flag so tests and pipes can get plain text. typer.echo also strips ANSI
codes when stdout is not a terminal.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

import typer

from sprint_tracker.domain.sprint import (
    DONE_STATUS,
    EDITABLE_FIELDS,
    SprintDocument,
    Task,
    TechDebt,
    active_tasks,
    blocked_tasks,
    compute_stats,
    count_by_status,
    group_by_column,
    round_half_up,
    row_count,
)

BOARD_WIDTH = 80
COLUMN_RULE = "│"

PRIORITY_ICONS = {
    "critical": "🔴",
    "high": "🟠",
    "medium": "🟡",
    "low": "🟢",
}
NEUTRAL_PRIORITY_ICON = "⚪"

TYPE_ICONS = {
    "feature": "✨",
    "bug": "🐛",
    "refactor": "♻️",
    "docs": "📚",
    "test": "🧪",
    "chore": "🔧",
    "spike": "🔬",
}
DEFAULT_TYPE_ICON = "📌"

STATUS_STYLES: dict[str, dict[str, Any]] = {
    "backlog": {"dim": True},
    "todo": {"dim": True},
    "ready": {"fg": typer.colors.CYAN},
    "in_progress": {"fg": typer.colors.YELLOW},
    "review": {"fg": typer.colors.MAGENTA},
    "done": {"fg": typer.colors.GREEN},
    "blocked": {"fg": typer.colors.RED},
}

DEBT_STYLES = {
    "closed": ("✅", typer.colors.GREEN),
    "partial": ("🔄", typer.colors.YELLOW),
}
OPEN_DEBT_STYLE = ("❌", typer.colors.RED)


# =============================================================================
# Helpers
# =============================================================================


def _paint(text: str, color: bool, **style: Any) -> str:
    return typer.style(text, **style) if color and style else text


def _status_text(text: str, status: str, color: bool) -> str:
    return _paint(text, color, **STATUS_STYLES.get(status, {}))


def _hours(value: float) -> str:
    return f"{value:g}"


def _date(value: Any) -> str:
    return value.isoformat() if value is not None else "?"


def priority_icon(priority: str) -> str:
    return PRIORITY_ICONS.get(priority, NEUTRAL_PRIORITY_ICON)


def type_icon(task_type: str) -> str:
    return TYPE_ICONS.get(task_type, DEFAULT_TYPE_ICON)


def pad_cell(text: str, width: int) -> str:
    """Cut ``text`` to ``width`` characters, or pad it with spaces."""
    if len(text) >= width:
        return text[:width]
    return text + " " * (width - len(text))


def column_title(column: str) -> str:
    return column.replace("_", " ").upper()


def progress_bar(percent: int, width: int = 15) -> str:
    filled = min(max(round_half_up(percent / 100 * width), 0), width)
    return f"[{'█' * filled}{'░' * (width - filled)}]"


# =============================================================================
# Board
# =============================================================================


def render_board(
    document: SprintDocument,
    columns: Sequence[str],
    width: int = BOARD_WIDTH,
    color: bool = True,
) -> str:
    """Render the current sprint as a fixed-width column grid.

    Each column is ``width // len(columns)`` characters wide; cells show
    the priority icon and task id. Tasks whose status is not a column are
    not shown in the grid.
    """
    tasks = active_tasks(document)
    grouped = group_by_column(tasks, columns)
    col_width = width // len(columns)

    lines = [
        "",
        "═" * width,
        _paint(f"  SPRINT {document.current_sprint} - {document.project}", color, bold=True),
        f"  {_date(document.sprint_start)} → {_date(document.sprint_end)}",
        "═" * width,
        "",
        COLUMN_RULE.join(pad_cell(column_title(col), col_width) for col in columns),
        "─" * width,
    ]

    for i in range(row_count(grouped)):
        cells = []
        for col in columns:
            column_tasks = grouped[col]
            if i < len(column_tasks):
                task = column_tasks[i]
                cell = pad_cell(f"{priority_icon(task.priority)} {task.id}", col_width)
                cells.append(_status_text(cell, col, color))
            else:
                cells.append(pad_cell("", col_width))
        lines.append(COLUMN_RULE.join(cells))

    stats = compute_stats(tasks)
    lines.extend(
        [
            "",
            "─" * width,
            f"{_paint('Progress:', color, bold=True)} "
            f"{stats.done_points}/{stats.total_points} points ({stats.progress_percent}%)",
        ]
    )

    blocked = blocked_tasks(tasks)
    if blocked:
        lines.append(f"{_paint('Blockers:', color, fg=typer.colors.RED)} {', '.join(t.id for t in blocked)}")

    updated = document.last_updated.isoformat() if document.last_updated else "never"
    lines.append(_paint(f"Updated: {updated}", color, dim=True))
    lines.append("")
    return "\n".join(lines)


def render_markdown_board(
    document: SprintDocument,
    columns: Sequence[str],
    now: datetime,
) -> str:
    """Render the current sprint as a markdown kanban table plus task details."""
    tasks = active_tasks(document)
    grouped = group_by_column(tasks, columns)

    lines = [
        f"# Sprint Board - {document.project}",
        "",
        f"**Sprint:** {document.current_sprint} | **Version:** {document.version}",
        f"**Period:** {_date(document.sprint_start)} → {_date(document.sprint_end)}",
        f"**Updated:** {now.isoformat()}",
        "",
        "---",
        "",
        "## Kanban Board",
        "",
        "| " + " | ".join(column_title(col) for col in columns) + " |",
        "|" + "|".join("---" for _ in columns) + "|",
    ]

    for i in range(row_count(grouped)):
        row = "|"
        for col in columns:
            column_tasks = grouped[col]
            if i < len(column_tasks):
                task = column_tasks[i]
                row += f" {priority_icon(task.priority)} **{task.id}** |"
            else:
                row += " |"
        lines.append(row)

    lines.extend(["", "---", "", "## Tasks", ""])
    for task in tasks:
        if task.status == DONE_STATUS:
            icon = "✅"
        elif task.status == "in_progress":
            icon = "🔄"
        else:
            icon = "⬜"
        lines.append(f"### {icon} {task.id}: {task.title}")
        lines.append("")
        lines.append(f"- **Status:** {task.status}")
        lines.append(f"- **Priority:** {task.priority}")
        lines.append(f"- **Points:** {task.points}")
        lines.append(f"- **Owner:** {task.owner or 'unassigned'}")
        if task.branch:
            lines.append(f"- **Branch:** `{task.branch}`")
        lines.append("")

    stats = compute_stats(tasks)
    capacity = document.capacity
    lines.extend(
        [
            "---",
            "",
            "## Summary",
            "",
            f"- **Progress:** {stats.done_points}/{stats.total_points} points "
            f"({stats.progress_percent}%)",
            f"- **Capacity:** {_hours(capacity.committed)}h / {_hours(capacity.total_hours)}h",
        ]
    )
    blocked = blocked_tasks(tasks)
    if blocked:
        lines.append(f"- **Blockers:** {', '.join(t.id for t in blocked)}")
    lines.append("")
    return "\n".join(lines)


# =============================================================================
# Other views
# =============================================================================


def render_status(document: SprintDocument, color: bool = True) -> str:
    tasks = active_tasks(document)
    stats = compute_stats(tasks)

    lines = [
        "",
        "═" * 50,
        _paint(f"  SPRINT {document.current_sprint} STATUS", color, bold=True),
        "═" * 50,
    ]
    for status, count in count_by_status(tasks).items():
        lines.append(f"{_status_text(pad_cell(status + ':', 15), status, color)} {count} tasks")

    capacity = document.capacity
    lines.extend(
        [
            "",
            f"{_paint('Points:', color, bold=True)} {stats.done_points}/{stats.total_points}",
            f"{_paint('Capacity:', color, bold=True)} "
            f"{_hours(capacity.committed)}h / {_hours(capacity.total_hours)}h",
            "",
        ]
    )
    return "\n".join(lines)


def render_task_list(tasks: Sequence[Task], color: bool = True) -> str:
    if not tasks:
        return _paint("No tasks found", color, dim=True)

    lines = ["", "─" * 70]
    for task in tasks:
        lines.append(
            f"{priority_icon(task.priority)} {_paint(task.id, color, bold=True)} "
            f"{type_icon(task.type)} {task.title}"
        )
        lines.append(
            f"   {_status_text(f'[{task.status}]', task.status, color)} │ "
            f"{task.points} pts │ {task.owner or 'unassigned'}"
        )
        if task.branch:
            lines.append(_paint(f"   ↳ {task.branch}", color, dim=True))
        lines.append("")
    return "\n".join(lines)


def render_task_detail(task: Task, color: bool = True) -> str:
    lines = [
        "",
        "═" * 60,
        _paint(f"{task.id}: {task.title}", color, bold=True),
        "═" * 60,
        "",
        f"Status:   {_status_text(task.status, task.status, color)}",
        f"Priority: {priority_icon(task.priority)} {task.priority}",
        f"Type:     {type_icon(task.type)} {task.type}",
        f"Points:   {task.points}",
        f"Sprint:   {task.sprint}",
        f"Owner:    {task.owner or 'unassigned'}",
    ]
    if task.branch:
        lines.append(f"Branch:   {_paint(task.branch, color, fg=typer.colors.CYAN)}")
    if task.worktree:
        lines.append(f"Worktree: {task.worktree}")
    if task.linked_td:
        lines.append(f"Tech Debt: {task.linked_td}")
    if task.is_linked:
        lines.append(f"Issue:    #{task.github_issue}" + (f" {task.github_url}" if task.github_url else ""))

    if task.acceptance_criteria:
        lines.extend(["", _paint("Acceptance Criteria:", color, bold=True)])
        lines.extend(f"  {i}. {ac}" for i, ac in enumerate(task.acceptance_criteria, start=1))

    if task.blockers:
        lines.extend(["", _paint("Blockers:", color, fg=typer.colors.RED)])
        lines.extend(f"  • {blocker}" for blocker in task.blockers)

    if task.notes:
        lines.extend(["", _paint(f"Notes: {task.notes}", color, dim=True)])

    lines.extend(["", f"Created: {_date(task.created_at)}"])
    if task.completed_at:
        lines.append(f"Done:    {task.completed_at.isoformat()}")
    lines.append("")
    return "\n".join(lines)


def _render_debt_item(item: TechDebt, color: bool) -> list[str]:
    icon, fg = DEBT_STYLES.get(item.status, OPEN_DEBT_STYLE)
    lines = [
        "",
        f"{icon} {_paint(item.id, color, bold=True)} {_paint(f'[{item.status}]', color, fg=fg)}",
        f"   {progress_bar(item.progress)} {item.progress}%",
    ]
    if item.linked_task:
        lines.append(_paint(f"   → {item.linked_task}", color, dim=True))
    return lines


def render_debt(document: SprintDocument, color: bool = True) -> str:
    if not document.technical_debt:
        return _paint("No technical debt tracked", color, dim=True)

    lines = ["", "═" * 50, _paint("  TECHNICAL DEBT", color, bold=True), "═" * 50]
    for item in document.technical_debt:
        lines.extend(_render_debt_item(item, color))
    lines.append("")
    return "\n".join(lines)


HELP_TEXT = f"""
Sprint Tracker CLI - Lightweight task management

SETUP
  sprint init [name]              Initialize tracker in current directory

VIEW
  sprint                          Show kanban board
  sprint board                    Show kanban board
  sprint status                   Show sprint summary
  sprint list [status]            List tasks (optionally filter by status)
  sprint show <id>                Show task details
  sprint debt                     Show technical debt

MANAGE
  sprint add "title"              Add new task
  sprint move <id> <status>       Move task to status
  sprint edit <id> <field> <val>  Edit task field
  sprint generate                 Generate SPRINT_BOARD.md

GITHUB SYNC
  sprint push [--all]             Create/update GitHub issues from tasks
  sprint pull                     Update task status from GitHub issues
  sprint link <id> <issue#>       Link task to existing issue

STATUSES
  backlog, ready, in_progress, review, done

FIELDS
  {", ".join(EDITABLE_FIELDS)}

EXAMPLES
  sprint init "My Project"
  sprint add "Implement login feature"
  sprint edit TASK-001 priority high
  sprint edit TASK-001 points 5
  sprint move TASK-001 in_progress
  sprint board
"""
