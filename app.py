"""Command-line interface for ttrack."""
import argparse
import sys
from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from business_logic.date_parser import NaturalDateParser
from business_logic.report import ReportEngine, ReportFilter
from business_logic.task_store import TaskStore
from business_logic.time_tracker import TimeTracker
from config import config
from errors import (
    AlreadyTrackingError,
    EmptyInputError,
    NotTrackingError,
    StorageError,
    TaskNotFoundError,
)
from json_handler import JsonTaskStorage
from logging_setup import configure_logging, get_logger
from models import TaskFilter
from ui.console_view import render_report, render_task_detail, render_task_list
from utils.time_utils import format_duration

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_STORAGE = 3

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all sub-commands and their aliases."""
    parser = argparse.ArgumentParser(
        prog="ttrack",
        description="Track tasks and the time spent on them.",
    )
    parser.add_argument(
        "--global",
        dest="use_global",
        action="store_true",
        help=f"Use the task file in {config.global_dir} instead of ./{config.data_filename}",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr")

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    p = sub.add_parser("add", aliases=["a"], help="Add a new task")
    p.add_argument("description", nargs="*", help="Task description")
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("list", aliases=["l", "ls"], help="List tasks")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--active", action="store_true", help="Only tasks not yet completed")
    group.add_argument("--completed", action="store_true", help="Only completed tasks")
    p.set_defaults(handler=cmd_list)

    id_commands = [
        ("show", ["v"], "Show task details and time entries", cmd_show),
        ("complete", ["c"], "Mark a task as complete", cmd_complete),
        ("delete", ["d", "del"], "Delete a task", cmd_delete),
        ("start", ["s"], "Start time tracking for a task", cmd_start),
        ("stop", ["p"], "Stop time tracking for a task", cmd_stop),
    ]
    for name, aliases, help_text, handler in id_commands:
        p = sub.add_parser(name, aliases=aliases, help=help_text)
        p.add_argument("task_id", nargs="?", type=int, help="Task id")
        p.set_defaults(handler=handler)

    p = sub.add_parser("report", aliases=["r"], help="Report tracked time grouped by day")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--date", metavar="D", help="Only one day: YYYY-MM-DD, yesterday, monday, -3, ...")
    group.add_argument("--today", action="store_true", help="Only today")
    group.add_argument("--week", action="store_true", help="Only the current calendar week")
    p.set_defaults(handler=cmd_report)

    p = sub.add_parser("help", aliases=["h"], help="Show this help message")
    p.set_defaults(handler=None)

    return parser


def _require_id(args: argparse.Namespace) -> int:
    if args.task_id is None:
        raise EmptyInputError("Please provide a task ID")
    return args.task_id


def cmd_add(args: argparse.Namespace, store: TaskStore) -> int:
    description = " ".join(args.description)
    if not description.strip():
        raise EmptyInputError("Please provide a task description")
    task = store.add(description)
    console.print(f"Task added: {escape(task.description)} (id {task.id})")
    return EXIT_OK


def cmd_list(args: argparse.Namespace, store: TaskStore) -> int:
    task_filter = TaskFilter.ALL
    if args.active:
        task_filter = TaskFilter.ACTIVE
    elif args.completed:
        task_filter = TaskFilter.COMPLETED

    tasks = store.list_tasks(task_filter)
    if not tasks:
        console.print("No tasks found.")
    else:
        console.print(render_task_list(tasks))
    return EXIT_OK


def cmd_show(args: argparse.Namespace, store: TaskStore) -> int:
    task = store.get(_require_id(args))
    tracker = TimeTracker(store)
    console.print(render_task_detail(task, tracker.elapsed_seconds(task)))
    return EXIT_OK


def cmd_complete(args: argparse.Namespace, store: TaskStore) -> int:
    task_id = _require_id(args)
    was_tracking = store.get(task_id).is_tracking
    task = store.complete(task_id)
    if was_tracking:
        duration = format_duration(task.time_entries[-1].duration)
        console.print(f"Stopped time tracking for task {task_id}. Duration: {duration}")
    console.print(f"Task {task_id} marked as complete!")
    return EXIT_OK


def cmd_delete(args: argparse.Namespace, store: TaskStore) -> int:
    task_id = _require_id(args)
    store.delete(task_id)
    console.print(f"Task {task_id} deleted!")
    return EXIT_OK


def cmd_start(args: argparse.Namespace, store: TaskStore) -> int:
    task_id = _require_id(args)
    TimeTracker(store).start(task_id)
    console.print(f"Started time tracking for task {task_id}")
    return EXIT_OK


def cmd_stop(args: argparse.Namespace, store: TaskStore) -> int:
    task_id = _require_id(args)
    entry = TimeTracker(store).stop(task_id)
    console.print(f"Stopped time tracking for task {task_id}. Duration: {format_duration(entry.duration)}")
    return EXIT_OK


def cmd_report(args: argparse.Namespace, store: TaskStore) -> int:
    engine = ReportEngine(store)
    report_filter = ReportFilter.NONE
    on_date: Optional[date] = None

    if args.week:
        report_filter = ReportFilter.WEEK
    elif args.today:
        report_filter = ReportFilter.DATE
        on_date = engine.today()
    elif args.date:
        on_date = NaturalDateParser.parse(args.date, engine.today())
        if on_date is None:
            console.print(f"Invalid date: {escape(args.date)}")
            return EXIT_ERROR
        report_filter = ReportFilter.DATE

    report = engine.generate(report_filter, on_date)
    if report.has_no_entries:
        console.print("No time entries found.")
    elif report.is_filtered_empty:
        console.print("No time entries match the selected period.")
    else:
        console.print(render_report(report))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one command.

    Args:
        argv: Command-line arguments without the program name. If None,
            uses sys.argv.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else config.log_level)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return EXIT_OK

    try:
        store = TaskStore(JsonTaskStorage(config.data_file(args.use_global)))
        logger.debug("Running %s on %s", args.command, store.storage.file_path)
        return handler(args, store)
    except TaskNotFoundError:
        console.print("Task not found.")
    except AlreadyTrackingError:
        console.print("Time tracking already started for this task!")
    except NotTrackingError:
        console.print("Time tracking not started for this task!")
    except EmptyInputError as e:
        console.print(str(e))
    except StorageError as e:
        err_console.print(f"Error: {escape(str(e))}")
        return EXIT_STORAGE
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
