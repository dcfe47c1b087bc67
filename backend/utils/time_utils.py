from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

# Reporting timezone (GMT+7)
LOCAL_OFFSET = timedelta(hours=7)
LOCAL_TZ = timezone(LOCAL_OFFSET)

LAST_UPDATE_FORMAT = "%m/%d/%Y %H:%M:%S"
TOKEN_EXPIRY_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def get_local_time():
    """
    Returns current time in the reporting timezone (GMT+7) as naive datetime.
    Useful for databases that store naive datetimes but we want the value to be local time.
    """
    return datetime.now(LOCAL_TZ).replace(tzinfo=None)


def format_last_update(moment: datetime = None) -> str:
    """Format a timestamp the way report tables show "last updated" (MM/DD/YYYY HH:MM:SS)"""
    return (moment or get_local_time()).strftime(LAST_UPDATE_FORMAT)


def to_local_date(value) -> date:
    """Calendar date of a date/datetime; aware datetimes are converted to local time first"""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(LOCAL_TZ)
        return value.date()
    return value


def parse_datetime(value):
    """
    Parse a config value into a datetime.

    Accepts datetime/date objects and ISO strings (with or without a trailing Z).
    Returns None for empty values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass
class DateRange:
    """Report window; both ends inclusive, serialized as whole local days"""
    date_from: date
    date_to: date

    def __post_init__(self):
        self.date_from = to_local_date(self.date_from)
        self.date_to = to_local_date(self.date_to)

    @property
    def start_string(self) -> str:
        return self.date_from.strftime("%Y-%m-%d") + " 00:00:00"

    @property
    def end_string(self) -> str:
        return self.date_to.strftime("%Y-%m-%d") + " 23:59:59"
