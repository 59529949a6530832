"""Tests for time tracking functionality."""
import pytest
from datetime import datetime, timedelta, timezone
from errors import AlreadyTrackingError, NotTrackingError, TaskNotFoundError
from business_logic.task_store import TaskStore
from business_logic.time_tracker import TimeTracker


@pytest.fixture
def one_task(store):
    """Store holding a single idle task with id 1."""
    store.add("Write report")
    return store


class TestTimeTrackerInitialization:
    """Test TimeTracker construction."""

    def test_uses_store_clock_by_default(self, store, clock):
        """Without a clock argument the store clock is used."""
        assert TimeTracker(store).clock is clock

    def test_custom_clock(self, store):
        """An explicit clock overrides the store clock."""
        custom = lambda: None  # noqa: E731
        assert TimeTracker(store, clock=custom).clock is custom


class TestStart:
    """Test starting sessions."""

    def test_start_sets_current_entry(self, one_task, tracker, clock):
        """Starting records the current instant."""
        task = tracker.start(1)
        assert task.current_entry == clock.now
        assert task.is_tracking

    def test_start_persists(self, one_task, tracker, storage, clock):
        """The open session is written to the file."""
        tracker.start(1)
        assert storage.load()[0].current_entry == clock.now

    def test_start_twice_keeps_original_instant(self, one_task, tracker, clock):
        """A second start fails and leaves the first start instant alone."""
        first = clock.now
        tracker.start(1)
        clock.advance(60)
        with pytest.raises(AlreadyTrackingError):
            tracker.start(1)
        assert one_task.get(1).current_entry == first

    def test_start_unknown_task(self, one_task, tracker):
        """Starting an unknown id raises."""
        with pytest.raises(TaskNotFoundError):
            tracker.start(9)

    def test_multiple_tasks_can_track(self, one_task, tracker):
        """Two different tasks may track at the same time."""
        one_task.add("Second")
        tracker.start(1)
        tracker.start(2)
        assert all(task.is_tracking for task in one_task.tasks)


class TestStop:
    """Test stopping sessions."""

    def test_stop_records_entry(self, one_task, tracker, clock):
        """Stopping appends an entry spanning the session."""
        started = clock.now
        tracker.start(1)
        clock.advance(90)

        entry = tracker.stop(1)

        task = one_task.get(1)
        assert entry.start == started
        assert entry.end == started + timedelta(seconds=90)
        assert entry.duration == 90
        assert task.total_time == 90
        assert task.time_entries == [entry]
        assert task.current_entry is None

    def test_stop_accumulates_sessions(self, one_task, tracker, clock):
        """Repeated sessions add up in total_time."""
        for seconds in (60, 30.5):
            tracker.start(1)
            clock.advance(seconds)
            tracker.stop(1)
            clock.advance(600)

        task = one_task.get(1)
        assert task.total_time == 90.5
        assert [e.duration for e in task.time_entries] == [60, 30.5]

    def test_stop_persists(self, one_task, tracker, storage, clock):
        """The closed session is written to the file."""
        tracker.start(1)
        clock.advance(45)
        tracker.stop(1)
        [saved] = storage.load()
        assert saved.total_time == 45
        assert saved.current_entry is None

    def test_stop_without_start(self, one_task, tracker, task_file):
        """Stopping an idle task fails without touching its history."""
        before = task_file.read_text()
        with pytest.raises(NotTrackingError):
            tracker.stop(1)
        task = one_task.get(1)
        assert task.total_time == 0
        assert task.time_entries == []
        assert task_file.read_text() == before

    def test_stop_unknown_task(self, one_task, tracker):
        """Stopping an unknown id raises."""
        with pytest.raises(TaskNotFoundError):
            tracker.stop(9)

    def test_stop_with_clock_moved_backwards(self, one_task, tracker, clock):
        """A clock that went backwards records zero time."""
        tracker.start(1)
        clock.advance(-300)
        entry = tracker.stop(1)
        assert entry.duration == 0
        assert one_task.get(1).total_time == 0

    def test_session_survives_reload(self, one_task, storage, clock):
        """A session started in one process can be stopped in the next."""
        TimeTracker(one_task).start(1)
        clock.advance(120)

        reloaded = TaskStore(storage, clock=clock)
        entry = TimeTracker(reloaded).stop(1)
        assert entry.duration == 120

    def test_stop_across_dst_change(self, one_task, tracker, clock):
        """A session spanning a fall-back change counts real elapsed time."""
        clock.set(datetime(2024, 11, 3, 1, 30, tzinfo=timezone(timedelta(hours=-4))))
        tracker.start(1)
        clock.set(datetime(2024, 11, 3, 1, 10, tzinfo=timezone(timedelta(hours=-5))))

        entry = tracker.stop(1)

        assert entry.duration == 2400
        assert one_task.get(1).total_time == 2400


class TestElapsed:
    """Test live elapsed time."""

    def test_elapsed_while_tracking(self, one_task, tracker, clock):
        """Elapsed time counts from the session start."""
        tracker.start(1)
        clock.advance(75)
        assert tracker.elapsed_seconds(one_task.get(1)) == 75

    def test_elapsed_when_idle(self, one_task, tracker):
        """An idle task has no elapsed time."""
        assert tracker.elapsed_seconds(one_task.get(1)) == 0
