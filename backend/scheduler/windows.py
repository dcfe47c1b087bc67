"""
Scheduler windows - Report windows and their date ranges
"""
from datetime import date, datetime, timedelta
from typing import Dict, Optional

from utils.time_utils import DateRange, get_local_time, to_local_date

# Window name -> days back from the configured max time
ROLLING_WINDOWS: Dict[str, int] = {
    "LAST2": 2,
    "LAST3": 3,
    "LAST7": 7,
    "LAST30": 30,
    "LAST60": 60,
}

# Window name -> months back from today (whole calendar month)
CALENDAR_MONTH_WINDOWS: Dict[str, int] = {
    "LASTMONTH": 1,
    "LAST2MONTH": 2,
}

REPORT_WINDOWS = (
    "TODAY",
    "YESTERDAY",
    "LAST2",
    "LAST3",
    "LAST7",
    "LAST30",
    "LAST60",
    "THISMONTH",
    "LASTMONTH",
    "LAST2MONTH",
)


def _month_bounds(today: date, months_back: int):
    """First and last day of the calendar month `months_back` before today's month"""
    month_index = today.year * 12 + (today.month - 1) - months_back
    year, month = divmod(month_index, 12)
    first = date(year, month + 1, 1)

    next_index = month_index + 1
    next_year, next_month = divmod(next_index, 12)
    last = date(next_year, next_month + 1, 1) - timedelta(days=1)
    return first, last


def build_date_range(window: str, config, today: Optional[date] = None) -> DateRange:
    """
    Date range for a report window.

    Args:
        window: One of REPORT_WINDOWS
        config: AppConfig (uses report_min_time / report_max_time)
        today: Override for the calendar-month windows

    Raises:
        ValueError: Unknown window
    """
    window = window.upper()
    max_date = to_local_date(config.report_max_time())

    if window == "TODAY":
        return DateRange(config.report_min_time(), max_date)

    if window == "YESTERDAY":
        yesterday = max_date - timedelta(days=1)
        return DateRange(yesterday, yesterday)

    if window in ROLLING_WINDOWS:
        return DateRange(max_date - timedelta(days=ROLLING_WINDOWS[window]), max_date)

    if window == "THISMONTH":
        return DateRange(max_date.replace(day=1), max_date)

    if window in CALENDAR_MONTH_WINDOWS:
        if today is None:
            today = get_local_time().date()
        elif isinstance(today, datetime):
            today = to_local_date(today)
        first, last = _month_bounds(today, CALENDAR_MONTH_WINDOWS[window])
        return DateRange(first, last)

    raise ValueError(f"Unknown report window: {window}")
