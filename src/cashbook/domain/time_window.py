"""Business-day time window resolution.

The store keeps instants in UTC while the business operates at a fixed UTC-5
offset with no daylight saving. A business day D therefore spans
``D 05:00:00.000Z`` to ``D+1 04:59:59.999Z``.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Union

from cashbook.domain.entities import TimeWindow
from cashbook.domain.errors import InvalidDateError, invalid_date
from cashbook.utils.date_parser import BUSINESS_TIMEZONE, parse_date

WINDOW_RESOLUTION = timedelta(milliseconds=1)

DateInput = Union[date, datetime, str]


def to_calendar_date(value: DateInput) -> date:
    """Reduce a date-like value to its own year/month/day.

    Time of day and timezone of a datetime are ignored.

    Raises:
        InvalidDateError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_date(value)
        except ValueError as e:
            raise InvalidDateError(f"{invalid_date(value)} ({e})") from e
    raise InvalidDateError(invalid_date(value))


def resolve_time_window(value: DateInput) -> TimeWindow:
    """Return the UTC window covering the business day of ``value``.

    Args:
        value: A date, a datetime, or a date string ("2024-03-15", "today")

    Returns:
        TimeWindow whose ``start`` is local midnight and ``end`` is local
        23:59:59.999, both expressed as aware UTC datetimes

    Raises:
        InvalidDateError: If the value is not a valid calendar date, or its
            window falls outside the representable datetime range
    """
    day = to_calendar_date(value)
    local_start = datetime.combine(day, time.min, tzinfo=BUSINESS_TIMEZONE)
    try:
        local_end = local_start + timedelta(days=1) - WINDOW_RESOLUTION
        start = local_start.astimezone(timezone.utc)
        end = local_end.astimezone(timezone.utc)
    except OverflowError as e:
        # The window of the last representable day ends past datetime.max
        raise InvalidDateError(invalid_date(value)) from e
    return TimeWindow(date=day, start=start, end=end)
