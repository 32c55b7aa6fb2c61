import logging
from datetime import date

import pandas as pd

from beeyard.dates import as_date, end_of_day, start_of_day
from beeyard.db import Database
from beeyard.errors import DataUnavailable, OperationFailure
from beeyard.hive.repository import HiveRepository
from beeyard.models import Recording
from beeyard.record.repository import RecordRepository
from beeyard.result import Result, read_operation, write_operation

logger = logging.getLogger(__name__)


def _day(value, error: type) -> date:
    try:
        return as_date(value)
    except (TypeError, ValueError):
        raise error(f"not a date: {value!r}")


class RecordingService:
    """
    Day-bounded views over a hive's records.

    A day runs from 00:00:00.000 to 23:59:59.999 inclusive; see
    ``beeyard.dates``.
    """

    def __init__(self, database: Database):
        self.database = database
        self.records = RecordRepository(database)
        self.hives = HiveRepository(database)

    @read_operation
    def get_recording(self, hive_id: int, start: date, end: date) -> Result[Recording]:
        """
        Records of a hive from the start of ``start`` to the end of ``end``,
        wrapped as a single Recording dated ``start``.
        """
        start, end = _day(start, DataUnavailable), _day(end, DataUnavailable)
        with self.database.transaction():
            self._require_hive(hive_id)
            records = self.records.find(hive_id, start_of_day(start), end_of_day(end))
        return Result.success(Recording(start, records))

    @read_operation
    def get_recording_dataframe(self, hive_id: int, start: date, end: date) -> Result[pd.DataFrame]:
        """Same selection as get_recording(), as a DataFrame for analysis."""
        start, end = _day(start, DataUnavailable), _day(end, DataUnavailable)
        with self.database.transaction():
            self._require_hive(hive_id)
            df = self.records.find_dataframe(hive_id, start_of_day(start), end_of_day(end))
        return Result.success(df)

    @write_operation
    def delete_recording(self, hive_id: int, recording: Recording) -> Result[int]:
        """
        Delete every record of the hive that falls on ``recording.date``.

        The records carried by ``recording`` are ignored; only its date
        matters. Returns the number of records deleted.
        """
        day = _day(recording.date, OperationFailure)
        with self.database.transaction():
            self._require_hive(hive_id)
            deleted = self.records.delete_range(hive_id, start_of_day(day), end_of_day(day))
        logger.info("Deleted recording %s of hive %s (%d records)", day, hive_id, deleted)
        return Result.success(deleted)

    def _require_hive(self, hive_id: int) -> None:
        if not self.hives.exists(hive_id):
            raise DataUnavailable(f"hive {hive_id} not found")
