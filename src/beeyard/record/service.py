import dataclasses
import logging
from datetime import datetime
from typing import List

from beeyard.dates import to_wall_clock, truncate_to_millis
from beeyard.db import Database
from beeyard.errors import DataUnavailable, OperationFailure
from beeyard.hive.repository import HiveRepository
from beeyard.models import Record
from beeyard.record.repository import RecordRepository
from beeyard.result import Result, read_operation, write_operation

logger = logging.getLogger(__name__)


class RecordService:
    """Saving sensor records into a hive."""

    def __init__(self, database: Database):
        self.database = database
        self.repository = RecordRepository(database)
        self.hives = HiveRepository(database)

    @write_operation
    def save_record(self, hive_id: int, record: Record) -> Result[Record]:
        """Insert or replace a record by id and attach it to ``hive_id``."""
        with self.database.transaction():
            self._require_hive(hive_id)
            record = self._prepare(record, hive_id)
            self.repository.upsert(record)
        logger.debug("Saved record %s in hive %s", record.id, hive_id)
        return Result.success(record)

    @write_operation
    def save_records(self, hive_id: int, records: List[Record]) -> Result[List[Record]]:
        """
        Save a batch of new records into a hive.

        Ids are reassigned as a contiguous block starting one past the
        highest record id in the store, in input order. Returns the saved
        copies carrying their new ids.
        """
        with self.database.transaction():
            self._require_hive(hive_id)
            next_id = self.repository.next_id()
            saved = [
                dataclasses.replace(self._prepare(record, hive_id), id=next_id + offset)
                for offset, record in enumerate(records)
            ]
            self.repository.upsert_many(saved)
        logger.info("Saved %d records in hive %s", len(saved), hive_id)
        return Result.success(saved)

    @read_operation
    def get_next_record_id(self) -> Result[int]:
        return Result.success(self.repository.next_id())

    def _require_hive(self, hive_id: int) -> None:
        if not self.hives.exists(hive_id):
            raise DataUnavailable(f"hive {hive_id} not found")

    @staticmethod
    def _prepare(record: Record, hive_id: int) -> Record:
        if record.timestamp is None:
            raise OperationFailure("record timestamp is required")
        if not isinstance(record.timestamp, datetime):
            raise OperationFailure(f"record timestamp must be a datetime, got {record.timestamp!r}")
        timestamp = truncate_to_millis(to_wall_clock(record.timestamp))
        return dataclasses.replace(record, hive_id=hive_id, timestamp=timestamp)
