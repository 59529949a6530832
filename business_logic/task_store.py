"""In-memory task collection backed by a JSON file."""
from datetime import datetime
from typing import Callable, List, Optional

from errors import EmptyInputError, TaskNotFoundError
from json_handler import JsonTaskStorage
from logging_setup import get_logger
from models import Task, TaskFilter

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return the current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


class TaskStore:
    """
    Ordered collection of tasks with id assignment and CRUD operations.

    The store loads every task once when created and writes the whole list
    back after each successful change. Failed operations never write.
    """

    def __init__(self, storage: JsonTaskStorage, clock: Clock = local_now):
        """
        Initialize TaskStore.

        Args:
            storage: Codec for the backing JSON file
            clock: Source of the current time, injectable for tests

        Raises:
            StorageError: If the backing file exists but cannot be loaded
        """
        self.storage = storage
        self.clock = clock
        self.tasks: List[Task] = storage.load()
        self._last_id = max((task.id for task in self.tasks), default=0)

    def save(self):
        """Persist the full task list."""
        self.storage.save(self.tasks)

    def next_id(self) -> int:
        """Return the id the next added task will receive.

        Ids handed out earlier by this store are never reused, even when the
        task holding the highest id has since been deleted.
        """
        highest = max((task.id for task in self.tasks), default=0)
        return max(highest, self._last_id) + 1

    def add(self, description: str) -> Task:
        """
        Add a new task.

        Args:
            description: What the task is about

        Returns:
            The created task

        Raises:
            EmptyInputError: If the description is blank
        """
        description = description.strip()
        if not description:
            raise EmptyInputError("Please provide a task description")

        task = Task(id=self.next_id(), description=description)
        self._last_id = task.id
        self.tasks.append(task)
        self.save()
        logger.debug("Added task %d", task.id)
        return task

    def list_tasks(self, task_filter: TaskFilter = TaskFilter.ALL) -> List[Task]:
        """Return tasks matching the filter, in storage order."""
        if task_filter is TaskFilter.ACTIVE:
            return [task for task in self.tasks if not task.completed]
        if task_filter is TaskFilter.COMPLETED:
            return [task for task in self.tasks if task.completed]
        return list(self.tasks)

    def find(self, task_id: int) -> Optional[Task]:
        """Find a task by id, or None."""
        return next((task for task in self.tasks if task.id == task_id), None)

    def get(self, task_id: int) -> Task:
        """
        Get a task by id.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def complete(self, task_id: int) -> Task:
        """
        Mark a task complete, closing its open session first if any.

        Args:
            task_id: Id of the task to complete

        Returns:
            The completed task

        Raises:
            TaskNotFoundError: If no task has that id
        """
        task = self.get(task_id)
        if task.is_tracking:
            entry = task.close_session(self.clock())
            logger.debug("Closed session on task %d (%.1fs) before completing", task_id, entry.duration)
        task.mark_complete()
        self.save()
        return task

    def delete(self, task_id: int) -> Task:
        """
        Remove a task from the store.

        Returns:
            The removed task

        Raises:
            TaskNotFoundError: If no task has that id
        """
        task = self.get(task_id)
        self.tasks.remove(task)
        self.save()
        logger.debug("Deleted task %d", task_id)
        return task
