import dataclasses
import logging
from typing import List

from beeyard.apiary.repository import ApiaryRepository
from beeyard.db import Database
from beeyard.errors import DataUnavailable
from beeyard.hive.repository import HiveRepository
from beeyard.models import Hive
from beeyard.record.repository import RecordRepository
from beeyard.recording.aggregator import aggregate
from beeyard.result import Result, read_operation, write_operation

logger = logging.getLogger(__name__)


class HiveService:
    """Hive operations, including the per-day recordings view of a hive."""

    def __init__(self, database: Database):
        self.database = database
        self.repository = HiveRepository(database)
        self.apiaries = ApiaryRepository(database)
        self.records = RecordRepository(database)

    @read_operation
    def get_hives(self, apiary_id: int) -> Result[List[Hive]]:
        """Hives of an apiary; unavailable when the apiary does not exist."""
        if not self.apiaries.exists(apiary_id):
            raise DataUnavailable(f"apiary {apiary_id} not found")
        return Result.success(self.repository.list_by_apiary(apiary_id))

    @read_operation
    def get_hive(self, hive_id: int) -> Result[Hive]:
        return Result.of(self.repository.get_by_id(hive_id))

    @read_operation
    def get_hive_with_recordings(self, hive_id: int) -> Result[Hive]:
        """
        Load a hive and group its records into one Recording per day.

        The recordings are computed on every call and are not stored.
        """
        with self.database.transaction():
            hive = self.repository.get_by_id(hive_id)
            if hive is None:
                raise DataUnavailable(f"hive {hive_id} not found")
            records = self.records.find(hive_id)
        hive.recordings = aggregate(records)
        return Result.success(hive)

    @write_operation
    def save_hive(self, apiary_id: int, hive: Hive) -> Result[Hive]:
        """
        Insert or replace the hive and attach it to ``apiary_id``.

        Returns the saved copy; ``hive`` itself is left unchanged.
        """
        with self.database.transaction():
            if not self.apiaries.exists(apiary_id):
                raise DataUnavailable(f"apiary {apiary_id} not found")
            saved = dataclasses.replace(hive, apiary_id=apiary_id)
            self.repository.upsert(saved)
        logger.info("Saved hive %s in apiary %s", saved.id, apiary_id)
        return Result.success(saved)

    @write_operation
    def delete_hive(self, hive_id: int) -> Result[int]:
        """Delete a hive and all of its records. Returns the records removed."""
        with self.database.transaction():
            if not self.repository.exists(hive_id):
                raise DataUnavailable(f"hive {hive_id} not found")
            deleted = self.records.delete_by_hive_ids([hive_id])
            self.repository.delete_by_ids([hive_id])
        logger.info("Deleted hive %s (%d records)", hive_id, deleted)
        return Result.success(deleted)

    @read_operation
    def get_next_hive_id(self) -> Result[int]:
        return Result.success(self.repository.next_id())
