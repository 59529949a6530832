"""Time formatting utilities for ttrack."""

from datetime import datetime


def format_duration(seconds: float) -> str:
    """
    Format a duration as hours and minutes.

    Returns format like "1h 30m". Leftover seconds are dropped, not rounded,
    so anything under a minute shows as "0h 0m".

    Args:
        seconds: Duration in seconds (negative values count as zero)

    Returns:
        Formatted duration string
    """
    total = int(max(0, seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    return f"{hours}h {minutes}m"


def format_timestamp(value: datetime) -> str:
    """Format a moment in local time for display, e.g. "2025-11-08 14:05:09"."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_clock(value: datetime) -> str:
    """Format the local time of day for display, e.g. "14:05"."""
    return value.astimezone().strftime("%H:%M")
