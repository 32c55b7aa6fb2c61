"""
Day-boundary arithmetic shared by the aggregator and the range queries.

Timestamps are naive wall-clock datetimes stored at millisecond precision,
so a calendar day is exactly the closed range
``[00:00:00.000, 23:59:59.999]``.
"""

from datetime import date, datetime, time, timedelta

END_OF_DAY = time(23, 59, 59, 999000)


def date_only(timestamp: datetime) -> date:
    """Calendar day of a timestamp."""
    return timestamp.date()


def next_day(day: date) -> date:
    return day + timedelta(days=1)


def start_of_day(day: date) -> datetime:
    """First instant of ``day`` (00:00:00.000)."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last instant of ``day`` at millisecond precision (23:59:59.999)."""
    return datetime.combine(day, END_OF_DAY)


def truncate_to_millis(timestamp: datetime) -> datetime:
    """Drop sub-millisecond precision so end_of_day() bounds are exact."""
    return timestamp.replace(microsecond=timestamp.microsecond // 1000 * 1000)


def as_date(value) -> date:
    """Accept a date, a datetime or an ISO string and return the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def to_wall_clock(timestamp: datetime) -> datetime:
    """
    Drop any UTC offset and keep the local reading of the clock.

    ``08:00+02:00`` becomes a naive ``08:00``: a record belongs to the day
    shown on the hive's own clock, not to the matching UTC day.
    """
    return timestamp.replace(tzinfo=None)
