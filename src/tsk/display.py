"""Table rendering for task listings."""

from __future__ import annotations

from datetime import datetime

from rich.markup import escape
from rich.table import Table

from tsk.store import Task, status_label

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

STATUS_STYLES = {
    "TODO": "white",
    "DOING": "yellow",
    "ONTEST": "magenta",
    "DONE": "green",
}


def format_timestamp(ts: int, fmt: str = TIME_FORMAT) -> str:
    """Render unix seconds in local time; 0 means unset and renders empty."""
    if not ts:
        return ""
    return datetime.fromtimestamp(ts).strftime(fmt)


def task_table(
    rows: list[tuple[int, Task]],
    show_deleted: bool = False,
    name_width: int = 40,
    time_format: str = TIME_FORMAT,
) -> Table:
    """Build a bordered table of tasks.

    Rows are added in the order given; callers pass them already sorted.
    """
    table = Table(show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Task", style="white", max_width=name_width, overflow="fold")
    table.add_column("Status")
    table.add_column("Created At", style="dim", no_wrap=True)
    table.add_column("Updated At", style="dim", no_wrap=True)
    if show_deleted:
        table.add_column("Deleted At", style="red", no_wrap=True)

    for task_id, task in rows:
        label = status_label(task.status)
        style = STATUS_STYLES.get(label, "dim")
        cells = [
            str(task_id),
            escape(task.name),
            f"[{style}]{label}[/{style}]",
            format_timestamp(task.created_at, time_format),
            format_timestamp(task.updated_at, time_format),
        ]
        if show_deleted:
            cells.append(format_timestamp(task.deleted_at, time_format))
        table.add_row(*cells)

    return table
