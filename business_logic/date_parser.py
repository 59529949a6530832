"""Date parsing for report arguments."""
import re
from datetime import date, timedelta
from typing import Optional


class NaturalDateParser:
    """Parse natural language date inputs."""

    DAY_NAMES = {
        "monday": 0, "mon": 0,
        "tuesday": 1, "tue": 1, "tues": 1,
        "wednesday": 2, "wed": 2,
        "thursday": 3, "thu": 3, "thurs": 3,
        "friday": 4, "fri": 4,
        "saturday": 5, "sat": 5,
        "sunday": 6, "sun": 6
    }

    MONTH_NAMES = {
        "jan": 1, "january": 1,
        "feb": 2, "february": 2,
        "mar": 3, "march": 3,
        "apr": 4, "april": 4,
        "may": 5,
        "jun": 6, "june": 6,
        "jul": 7, "july": 7,
        "aug": 8, "august": 8,
        "sep": 9, "sept": 9, "september": 9,
        "oct": 10, "october": 10,
        "nov": 11, "november": 11,
        "dec": 12, "december": 12
    }

    @staticmethod
    def parse(input_str: str, today: Optional[date] = None) -> Optional[date]:
        """
        Parse natural language date input.

        Reports look back in time, so names resolve to past days.

        Supports:
        - ISO format: YYYY-MM-DD (absolute)
        - Words: today, yesterday
        - Relative offsets: -1, +2, etc. (relative to today)
        - Day names: monday, fri, etc. (most recent occurrence, today included)
        - Month + day: nov 10, december 25 (most recent occurrence)

        Args:
            input_str: Natural language date string
            today: Reference date. If None, uses date.today().

        Returns:
            Parsed date or None if parsing failed
        """
        input_str = input_str.strip().lower()
        if today is None:
            today = date.today()

        # Try ISO format (YYYY-MM-DD)
        try:
            return date.fromisoformat(input_str)
        except ValueError:
            pass

        if input_str == "today":
            return today
        elif input_str == "yesterday":
            return today - timedelta(days=1)

        # Try relative offset (+1, -1, etc.)
        if input_str.startswith('+') or input_str.startswith('-'):
            try:
                return today + timedelta(days=int(input_str))
            except ValueError:
                pass

        # Day names (most recent occurrence)
        if input_str in NaturalDateParser.DAY_NAMES:
            days_back = (today.weekday() - NaturalDateParser.DAY_NAMES[input_str]) % 7
            return today - timedelta(days=days_back)

        # Try to match "month day" pattern
        match = re.match(r'^(\w+)\s+(\d{1,2})$', input_str)
        if match:
            month_str, day_str = match.groups()
            if month_str in NaturalDateParser.MONTH_NAMES:
                month = NaturalDateParser.MONTH_NAMES[month_str]
                try:
                    target_date = date(today.year, month, int(day_str))
                    # If the date is still ahead, use last year
                    if target_date > today:
                        target_date = date(today.year - 1, month, int(day_str))
                    return target_date
                except ValueError:
                    pass

        return None
