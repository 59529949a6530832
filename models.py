"""Data models for task tracking."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class TaskFilter(Enum):
    """Which tasks a listing should include."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class TimeEntry:
    """One closed interval of tracked work on a task."""
    start: datetime
    end: datetime
    duration: float


@dataclass
class Task:
    """Represents a single task.

    Time tracking fields:
    - total_time: Sum of all closed entry durations in seconds
    - time_entries: Closed sessions, in the order they were stopped
    - current_entry: When the open session started (None if not tracking)
    """
    id: int
    description: str
    completed: bool = False
    total_time: float = 0.0
    time_entries: List[TimeEntry] = field(default_factory=list)
    current_entry: Optional[datetime] = None

    @property
    def is_tracking(self) -> bool:
        return self.current_entry is not None

    def close_session(self, end: datetime) -> TimeEntry:
        """Close the open session at ``end`` and record it.

        Appends the entry and adds its duration to total_time in one step,
        so total_time always matches the sum of time_entries. A clock that
        moved backwards yields a zero-length entry.

        Args:
            end: When the session ended

        Returns:
            The recorded TimeEntry

        Raises:
            ValueError: If no session is open
        """
        if self.current_entry is None:
            raise ValueError(f"Task {self.id} has no open session")

        duration = max(0.0, (end - self.current_entry).total_seconds())
        entry = TimeEntry(start=self.current_entry, end=end, duration=duration)
        self.time_entries.append(entry)
        self.total_time += duration
        self.current_entry = None
        return entry

    def mark_complete(self):
        """Mark the task as completed."""
        self.completed = True
