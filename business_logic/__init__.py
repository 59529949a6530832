"""Core task tracking logic.

Modules:
    task_store: Task collection with id assignment and persistence
    time_tracker: Start/stop session tracking
    report: Date-grouped reports over time entries
    date_parser: Natural language dates for report arguments
"""
