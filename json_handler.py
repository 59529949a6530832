"""Handle reading and writing tasks from/to a JSON file.

The whole task list is loaded at once and written back in full after every
change. There is no file locking: two processes saving the same file at the
same time race, and the last writer wins.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from errors import StorageError
from logging_setup import get_logger
from models import Task, TimeEntry

logger = get_logger(__name__)

# Layout used by older versions of the tool, e.g. "2024-03-01 09:15:00 +0100"
LEGACY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def parse_timestamp(value: str) -> datetime:
    """Parse a stored timestamp into a timezone-aware datetime.

    Stored offsets are kept, so durations across a DST change subtract
    correctly. Values written without an offset are read as local time.

    Args:
        value: ISO 8601 text, or the legacy "date time offset" layout

    Returns:
        Aware datetime

    Raises:
        ValueError: If the value matches neither layout
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        parsed = datetime.strptime(value, LEGACY_TIMESTAMP_FORMAT)

    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def serialize_timestamp(value: datetime) -> str:
    """Serialize a datetime for storage, with its UTC offset."""
    return value.isoformat()


def task_to_dict(task: Task) -> Dict[str, Any]:
    """Convert a task to its JSON-ready dictionary.

    The current_entry key is only written while a session is open.
    """
    data: Dict[str, Any] = {
        "id": task.id,
        "description": task.description,
        "completed": task.completed,
        "total_time": task.total_time,
        "time_entries": [
            {
                "start": serialize_timestamp(entry.start),
                "end": serialize_timestamp(entry.end),
                "duration": entry.duration,
            }
            for entry in task.time_entries
        ],
    }
    if task.current_entry is not None:
        data["current_entry"] = serialize_timestamp(task.current_entry)
    return data


def task_from_dict(data: Dict[str, Any]) -> Task:
    """Rebuild a task from its stored dictionary.

    Missing optional fields fall back to their defaults so documents written
    before time tracking existed still load.

    Raises:
        KeyError, TypeError, ValueError: If the record is malformed
    """
    entries = [
        TimeEntry(
            start=parse_timestamp(raw["start"]),
            end=parse_timestamp(raw["end"]),
            duration=float(raw["duration"]),
        )
        for raw in data.get("time_entries") or []
    ]
    current = data.get("current_entry")

    return Task(
        id=int(data["id"]),
        description=str(data["description"]),
        completed=bool(data.get("completed", False)),
        total_time=float(data.get("total_time") or 0),
        time_entries=entries,
        current_entry=parse_timestamp(current) if current else None,
    )


class JsonTaskStorage:
    """Load and save the task list as a JSON document."""

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize JsonTaskStorage.

        Args:
            file_path: Location of the JSON task file. Relative paths are
                resolved against the working directory at access time.
        """
        self.file_path = Path(file_path).expanduser()

    def load(self) -> List[Task]:
        """Load all tasks from the JSON file.

        Returns:
            Tasks in stored order. Empty list if the file doesn't exist yet.

        Raises:
            StorageError: If the file exists but cannot be read or parsed.
                A damaged file is never treated as an empty task list.
        """
        try:
            content = self.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No task file at %s, starting empty", self.file_path)
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", self.file_path, e)
            raise StorageError(f"Failed to read tasks from {self.file_path}: {e}") from e

        try:
            raw_tasks = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Corrupted task file %s: %s", self.file_path, e)
            raise StorageError(f"Task file {self.file_path} is corrupted: {e}") from e

        if not isinstance(raw_tasks, list):
            raise StorageError(f"Task file {self.file_path} does not contain a task list")

        tasks = []
        for position, raw in enumerate(raw_tasks):
            try:
                tasks.append(task_from_dict(raw))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.error("Invalid task record #%d in %s: %s", position, self.file_path, e)
                raise StorageError(
                    f"Task file {self.file_path} has an invalid record at position {position}: {e}"
                ) from e

        logger.debug("Loaded %d tasks from %s", len(tasks), self.file_path)
        return tasks

    def save(self, tasks: List[Task]):
        """Save all tasks to the JSON file, replacing its previous content.

        Creates the parent directory if needed.

        Args:
            tasks: The complete task list to store

        Raises:
            StorageError: If the file cannot be written
        """
        content = json.dumps([task_to_dict(task) for task in tasks], indent=2, ensure_ascii=False)
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text(content + "\n", encoding="utf-8")
        except OSError as e:
            logger.error("Cannot write %s: %s", self.file_path, e)
            raise StorageError(f"Failed to save tasks to {self.file_path}: {e}") from e

        logger.debug("Saved %d tasks to %s", len(tasks), self.file_path)

