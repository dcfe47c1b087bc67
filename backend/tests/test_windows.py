"""
Report window tests.
"""
from datetime import date, datetime

import pytest

from core.config_loader import AppConfig
from scheduler.windows import REPORT_WINDOWS, build_date_range


CONFIG = AppConfig(
    campaign_min_time=datetime(2025, 6, 15, 0, 0),
    campaign_max_time=datetime(2025, 6, 15, 12, 30),
)


@pytest.mark.parametrize("window, date_from, date_to", [
    ("TODAY", date(2025, 6, 15), date(2025, 6, 15)),
    ("YESTERDAY", date(2025, 6, 14), date(2025, 6, 14)),
    ("LAST2", date(2025, 6, 13), date(2025, 6, 15)),
    ("LAST3", date(2025, 6, 12), date(2025, 6, 15)),
    ("LAST7", date(2025, 6, 8), date(2025, 6, 15)),
    ("LAST30", date(2025, 5, 16), date(2025, 6, 15)),
    ("LAST60", date(2025, 4, 16), date(2025, 6, 15)),
    ("THISMONTH", date(2025, 6, 1), date(2025, 6, 15)),
])
def test_windows_relative_to_max_time(window, date_from, date_to):
    date_range = build_date_range(window, CONFIG)
    assert (date_range.date_from, date_range.date_to) == (date_from, date_to)


def test_calendar_month_windows_cross_year():
    last_month = build_date_range("LASTMONTH", CONFIG, today=date(2025, 1, 10))
    two_months = build_date_range("LAST2MONTH", CONFIG, today=date(2025, 3, 31))

    assert (last_month.date_from, last_month.date_to) == (date(2024, 12, 1), date(2024, 12, 31))
    assert (two_months.date_from, two_months.date_to) == (date(2025, 1, 1), date(2025, 1, 31))


def test_window_serialization():
    date_range = build_date_range("yesterday", CONFIG)
    assert date_range.start_string == "2025-06-14 00:00:00"
    assert date_range.end_string == "2025-06-14 23:59:59"


def test_today_without_min_time_uses_max_day():
    config = AppConfig(campaign_max_time=datetime(2025, 6, 15, 12, 30))
    date_range = build_date_range("TODAY", config)
    assert date_range.date_from == date_range.date_to == date(2025, 6, 15)


def test_unknown_window():
    with pytest.raises(ValueError):
        build_date_range("LAST90", CONFIG)


def test_all_windows_build():
    for window in REPORT_WINDOWS:
        build_date_range(window, CONFIG, today=date(2025, 6, 20))
