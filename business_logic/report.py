"""Date-grouped reporting over recorded time entries."""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from itertools import groupby
from typing import List, Optional, Tuple

from business_logic.task_store import Clock, TaskStore


def local_date(moment: datetime) -> date:
    """Return the calendar date of a moment in the local timezone."""
    return moment.astimezone().date()


class ReportFilter(Enum):
    """Which period a report covers."""
    NONE = "none"
    DATE = "date"
    WEEK = "week"


@dataclass
class ReportEntry:
    """A single time entry flattened together with its task."""
    task_id: int
    description: str
    start: datetime
    end: datetime
    duration: float


@dataclass
class DayGroup:
    """Entries that started on the same calendar day."""
    day: date
    entries: List[ReportEntry] = field(default_factory=list)

    @property
    def total_seconds(self) -> float:
        return sum(entry.duration for entry in self.entries)


@dataclass
class Report:
    """Result of a report run.

    total_entries counts every recorded entry before filtering, which lets
    callers tell an empty history apart from a period with no work.
    """
    groups: List[DayGroup]
    total_entries: int

    @property
    def has_no_entries(self) -> bool:
        return self.total_entries == 0

    @property
    def is_filtered_empty(self) -> bool:
        return self.total_entries > 0 and not self.groups

    @property
    def total_seconds(self) -> float:
        return sum(group.total_seconds for group in self.groups)


class ReportEngine:
    """Builds reports from the closed time entries of every task.

    Open sessions are not reported; they have no end yet.
    """

    def __init__(self, store: TaskStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or store.clock

    def entries(self) -> List[ReportEntry]:
        """Flatten all recorded time entries across tasks."""
        return [
            ReportEntry(
                task_id=task.id,
                description=task.description,
                start=entry.start,
                end=entry.end,
                duration=entry.duration,
            )
            for task in self.store.tasks
            for entry in task.time_entries
        ]

    def today(self) -> date:
        """Return today's date in the local timezone."""
        return self.clock().astimezone().date()

    @staticmethod
    def _matches(entry: ReportEntry, report_filter: ReportFilter, on_date: Optional[date],
                 this_week: Tuple[int, int]) -> bool:
        if report_filter is ReportFilter.DATE:
            return local_date(entry.start) == on_date
        if report_filter is ReportFilter.WEEK:
            # Same ISO calendar week as today, not the last seven days
            start = local_date(entry.start).isocalendar()
            return (start[0], start[1]) == this_week
        return True

    def generate(self, report_filter: ReportFilter = ReportFilter.NONE,
                 on_date: Optional[date] = None) -> Report:
        """
        Generate a report grouped by day.

        Entries are grouped by the local calendar date of their start.

        Args:
            report_filter: Period to include
            on_date: The day to report on when report_filter is DATE

        Returns:
            Report with one group per day, most recent day first, and entries
            in each group ordered by start time

        Raises:
            ValueError: If report_filter is DATE and on_date is missing
        """
        if report_filter is ReportFilter.DATE and on_date is None:
            raise ValueError("A date is required for a date report")

        today = self.today().isocalendar()
        this_week = (today[0], today[1])

        all_entries = self.entries()
        selected = [e for e in all_entries if self._matches(e, report_filter, on_date, this_week)]
        selected.sort(key=lambda e: e.start)

        groups = [
            DayGroup(day=day, entries=list(day_entries))
            for day, day_entries in groupby(selected, key=lambda e: local_date(e.start))
        ]
        groups.reverse()

        return Report(groups=groups, total_entries=len(all_entries))
