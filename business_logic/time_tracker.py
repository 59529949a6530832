"""Time tracking functionality for tasks."""
from typing import Optional

from business_logic.task_store import Clock, TaskStore
from errors import AlreadyTrackingError, NotTrackingError
from logging_setup import get_logger
from models import Task, TimeEntry

logger = get_logger(__name__)


class TimeTracker:
    """
    Start/stop session tracking on individual tasks.

    Each task is either idle or tracking. Starting records the current
    instant on the task; stopping turns that open session into a time entry.
    Several tasks may track at once.
    """

    def __init__(self, store: TaskStore, clock: Optional[Clock] = None):
        """
        Initialize TimeTracker.

        Args:
            store: The task store to operate on
            clock: Source of the current time. If None, uses the store's clock.
        """
        self.store = store
        self.clock = clock or store.clock

    def start(self, task_id: int) -> Task:
        """
        Start tracking time on a task.

        Args:
            task_id: Id of the task to track

        Returns:
            The task, now tracking

        Raises:
            TaskNotFoundError: If no task has that id
            AlreadyTrackingError: If the task is already tracking. The
                original start instant is kept.
        """
        task = self.store.get(task_id)
        if task.is_tracking:
            raise AlreadyTrackingError(task_id)

        task.current_entry = self.clock()
        self.store.save()
        logger.debug("Started tracking task %d at %s", task_id, task.current_entry.isoformat())
        return task

    def stop(self, task_id: int) -> TimeEntry:
        """
        Stop tracking time on a task.

        Args:
            task_id: Id of the task being tracked

        Returns:
            The time entry that was recorded

        Raises:
            TaskNotFoundError: If no task has that id
            NotTrackingError: If the task is not tracking
        """
        task = self.store.get(task_id)
        if not task.is_tracking:
            raise NotTrackingError(task_id)

        entry = task.close_session(self.clock())
        self.store.save()
        logger.debug("Stopped tracking task %d after %.1fs", task_id, entry.duration)
        return entry

    def elapsed_seconds(self, task: Task) -> float:
        """
        Get seconds elapsed so far in a task's open session.

        Args:
            task: The task to check

        Returns:
            Seconds since the session started (0 if not tracking)
        """
        if task.current_entry is None:
            return 0.0
        return max(0.0, (self.clock() - task.current_entry).total_seconds())
