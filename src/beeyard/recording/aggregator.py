"""
Partition a hive's record stream into per-day recordings.

The input must be sorted by timestamp. A cursor walks forward one calendar
day at a time: the earliest record at or after the cursor fixes the next
day, every record in ``[day, day + 1)`` becomes that day's Recording, and
the cursor jumps to the start of the following day. Days without records
are skipped because the cursor always lands on the next record present.
"""

from bisect import bisect_left
from datetime import datetime
from typing import List, Sequence

from beeyard.dates import date_only, next_day, start_of_day, to_wall_clock
from beeyard.models import Record, Recording


def aggregate(records: Sequence[Record]) -> List[Recording]:
    """
    Group timestamp-ordered records into one Recording per calendar day.

    Args:
        records: Records sorted ascending by timestamp. Ties keep their
            input order. Timestamps carrying a UTC offset are placed by
            their local clock reading.

    Returns:
        Recordings in ascending date order. Empty input gives an empty list.

    Raises:
        ValueError: if the records are not sorted by timestamp
    """
    timestamps = [to_wall_clock(r.timestamp) for r in records]
    for earlier, later in zip(timestamps, timestamps[1:]):
        if later < earlier:
            raise ValueError(f"records are not sorted by timestamp ({later} after {earlier})")

    recordings = []
    cursor = datetime.min
    while True:
        first = bisect_left(timestamps, cursor)
        if first == len(timestamps):
            break
        day = date_only(timestamps[first])
        cursor = start_of_day(next_day(day))
        last = bisect_left(timestamps, cursor, lo=first)
        recordings.append(Recording(day, list(records[first:last])))
    return recordings
