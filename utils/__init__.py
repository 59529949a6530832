"""Utility modules for ttrack.

This package provides utility functions for time formatting.

Modules:
    time_utils: Duration and timestamp formatting utilities
"""
from utils.time_utils import format_clock, format_duration, format_timestamp

__all__ = ["format_duration", "format_timestamp", "format_clock"]
