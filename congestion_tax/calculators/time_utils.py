"""Time utilities for the congestion tax calculator.

This module provides the low-level helpers the pipeline stages share:
- Parsing passage timestamps and times of day
- Converting times to minutes since midnight
- Elapsed minutes and same-day checks between timestamps
- Locale-independent weekday and month names

All values are naive; timezones are not handled.
"""

import datetime as dt
from typing import Tuple, Union

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

MINUTES_PER_DAY = 24 * 60

WEEKDAY_NAMES: Tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

MONTH_NAMES: Tuple[str, ...] = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)


def parse_timestamp(value: Union[str, dt.datetime]) -> dt.datetime:
    """Parse a passage timestamp.

    Args:
        value: A string in YYYY-MM-DD HH:MM:SS format, or a datetime

    Returns:
        The parsed datetime

    Raises:
        ValueError: If the string does not match the format

    Example:
        >>> parse_timestamp("2013-02-08 06:27:00")
        datetime.datetime(2013, 2, 8, 6, 27)
    """
    if isinstance(value, dt.datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    try:
        return dt.datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError as e:
        raise ValueError(
            f"Invalid timestamp: {value!r}. Expected format YYYY-MM-DD HH:MM:SS"
        ) from e


def parse_time_of_day(value: Union[str, dt.time]) -> dt.time:
    """Parse a time of day in HH:MM:SS or HH:MM format.

    Example:
        >>> parse_time_of_day("06:15")
        datetime.time(6, 15)
    """
    if isinstance(value, dt.time):
        return value
    text = value.strip()
    for fmt in (TIME_FORMAT, "%H:%M"):
        try:
            return dt.datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time of day: {value!r}. Expected HH:MM:SS or HH:MM")


def convert_time_to_minutes(time: dt.time) -> int:
    """Convert a time of day to minutes since midnight, ignoring seconds.

    Example:
        >>> convert_time_to_minutes(dt.time(6, 29, 59))
        389
    """
    return time.hour * 60 + time.minute


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as HH:MM.

    Example:
        >>> format_minutes(389)
        '06:29'
    """
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_between(start: dt.datetime, end: dt.datetime) -> float:
    """Elapsed minutes from start to end, including fractional minutes.

    Example:
        >>> minutes_between(dt.datetime(2013, 2, 8, 16, 48), dt.datetime(2013, 2, 8, 17, 49))
        61.0
    """
    return (end - start).total_seconds() / 60


def is_same_day(first: dt.datetime, second: dt.datetime) -> bool:
    """True if both timestamps fall on the same calendar date."""
    return first.date() == second.date()


def weekday_name(day: dt.date) -> str:
    """Lowercase English weekday name, independent of the process locale."""
    return WEEKDAY_NAMES[day.weekday()]


def month_name(day: dt.date) -> str:
    """Lowercase English month name, independent of the process locale."""
    return MONTH_NAMES[day.month - 1]


def name_forms(name: str) -> Tuple[str, str]:
    """Abbreviated and full form of a lowercase weekday or month name.

    Example:
        >>> name_forms("saturday")
        ('sat', 'saturday')
    """
    return name[:3], name
