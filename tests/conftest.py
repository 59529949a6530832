"""Pytest configuration and shared fixtures."""
import pytest
from datetime import datetime, timedelta
from json_handler import JsonTaskStorage
from business_logic.task_store import TaskStore
from business_logic.time_tracker import TimeTracker


def aware(moment: datetime) -> datetime:
    """Attach the local timezone to a naive datetime."""
    return moment if moment.tzinfo is not None else moment.astimezone()


class FakeClock:
    """Controllable clock for deterministic durations.

    Returns aware datetimes, like the real clock; naive values passed in
    are taken as local time.
    """

    def __init__(self, start: datetime):
        self.now = aware(start)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)

    def set(self, moment: datetime):
        self.now = aware(moment)


@pytest.fixture
def clock():
    """Fixture providing a fake clock set to a fixed Wednesday morning."""
    return FakeClock(datetime(2025, 11, 12, 9, 0, 0))


@pytest.fixture
def task_file(tmp_path):
    """Fixture providing the path of a not-yet-created task file."""
    return tmp_path / "tasks.json"


@pytest.fixture
def storage(task_file):
    """Fixture providing a JsonTaskStorage on a temporary file."""
    return JsonTaskStorage(task_file)


@pytest.fixture
def store(storage, clock):
    """Fixture providing an empty TaskStore driven by the fake clock."""
    return TaskStore(storage, clock=clock)


@pytest.fixture
def tracker(store):
    """Fixture providing a TimeTracker on the store."""
    return TimeTracker(store)


@pytest.fixture
def sample_store(store):
    """Fixture providing a store with three tasks, the second completed."""
    store.add("Buy groceries")
    store.add("Call mom")
    store.add("Write email")
    store.complete(2)
    return store
