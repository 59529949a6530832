"""Exceptions raised by the task tracker core."""


class TaskTrackerError(Exception):
    """Base class for all task tracker errors."""


class TaskNotFoundError(TaskTrackerError):
    """Raised when an operation references an id absent from the store."""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class AlreadyTrackingError(TaskTrackerError):
    """Raised when starting a session on a task that is already tracking."""

    def __init__(self, task_id: int):
        super().__init__(f"Time tracking already started for task {task_id}")
        self.task_id = task_id


class NotTrackingError(TaskTrackerError):
    """Raised when stopping a session on a task that is not tracking."""

    def __init__(self, task_id: int):
        super().__init__(f"Time tracking not started for task {task_id}")
        self.task_id = task_id


class EmptyInputError(TaskTrackerError):
    """Raised for a blank description or a missing task id."""


class StorageError(TaskTrackerError):
    """Raised when the task file cannot be read, parsed or written."""
