"""Rich renderables for task lists, task details and reports."""
from typing import List

from rich.console import Group, RenderableType
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from business_logic.report import Report
from models import Task
from utils.time_utils import format_clock, format_duration, format_timestamp

TRACKING_MARKER = "[🕒 Tracking]"


def _status(task: Task) -> str:
    if task.completed:
        return f"[green]{escape('[✓]')}[/green]"
    return escape("[ ]")


def render_task_list(tasks: List[Task]) -> Table:
    """Build the task list table."""
    table = Table(title="Tasks", show_header=True, header_style="bold", title_justify="left")
    table.add_column("ID", justify="right")
    table.add_column("Status")
    table.add_column("Description")
    table.add_column("Total time", justify="right")
    table.add_column("")

    for task in tasks:
        description = escape(task.description)
        if task.completed:
            description = f"[dim]{description}[/dim]"
        table.add_row(
            str(task.id),
            _status(task),
            description,
            format_duration(task.total_time),
            f"[yellow]{escape(TRACKING_MARKER)}[/yellow]" if task.is_tracking else "",
        )
    return table


def render_task_detail(task: Task, elapsed_seconds: float) -> RenderableType:
    """
    Build the detail view for one task.

    Args:
        task: The task to show
        elapsed_seconds: Time so far in the open session, shown when tracking

    Returns:
        Renderable with a summary block and the list of time entries
    """
    summary = Table(show_header=False, show_edge=False, pad_edge=False, box=None)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Task", f"{task.id}. {escape(task.description)}")
    summary.add_row("Status", "[green]Completed[/green]" if task.completed else "Open")
    summary.add_row("Total time", format_duration(task.total_time))
    if task.current_entry is not None:
        summary.add_row(
            "Active",
            f"[yellow]since {format_timestamp(task.current_entry)}, "
            f"elapsed so far {format_duration(elapsed_seconds)}[/yellow]",
        )

    if not task.time_entries:
        return Group(summary, Text(""), Text("No time entries recorded.", style="dim"))

    entries = Table(title="Time entries", show_header=True, header_style="bold", title_justify="left")
    entries.add_column("#", justify="right")
    entries.add_column("Start")
    entries.add_column("End")
    entries.add_column("Duration", justify="right")
    for number, entry in enumerate(task.time_entries, start=1):
        entries.add_row(
            str(number),
            format_timestamp(entry.start),
            format_timestamp(entry.end),
            format_duration(entry.duration),
        )
    return Group(summary, Text(""), entries)


def render_report(report: Report) -> RenderableType:
    """Build the grouped report: one table per day, newest day first."""
    parts: List[RenderableType] = []
    for group in report.groups:
        table = Table(
            title=f"{group.day.strftime('%A, %Y-%m-%d')}  [dim]total {format_duration(group.total_seconds)}[/dim]",
            title_justify="left",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Start")
        table.add_column("End")
        table.add_column("Task")
        table.add_column("Duration", justify="right")
        for entry in group.entries:
            table.add_row(
                format_clock(entry.start),
                format_clock(entry.end),
                f"{entry.task_id}. {escape(entry.description)}",
                format_duration(entry.duration),
            )
        parts.append(table)

    parts.append(Text(f"Total: {format_duration(report.total_seconds)}", style="bold"))
    return Group(*parts)
