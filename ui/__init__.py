"""Console rendering for ttrack.

Modules:
    console_view: Rich tables for task lists, task details and reports
"""
