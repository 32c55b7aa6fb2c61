import logging
from typing import List

from beeyard.apiary.repository import ApiaryRepository
from beeyard.db import Database
from beeyard.errors import DataUnavailable
from beeyard.hive.repository import HiveRepository
from beeyard.models import Apiary
from beeyard.record.repository import RecordRepository
from beeyard.result import Result, read_operation, write_operation

logger = logging.getLogger(__name__)


class ApiaryService:
    """
    Apiary operations. Every method runs as one unit against the store and
    returns a Result instead of raising.
    """

    def __init__(self, database: Database):
        self.database = database
        self.repository = ApiaryRepository(database)
        self.hives = HiveRepository(database)
        self.records = RecordRepository(database)

    @read_operation
    def get_apiaries(self) -> Result[List[Apiary]]:
        return Result.success(self.repository.list())

    @read_operation
    def get_apiary(self, apiary_id: int) -> Result[Apiary]:
        return Result.of(self.repository.get_by_id(apiary_id))

    @write_operation
    def save_apiary(self, apiary: Apiary) -> Result[None]:
        """Insert the apiary, or replace the stored one with the same id."""
        with self.database.transaction():
            self.repository.upsert(apiary)
        logger.info("Saved apiary %s", apiary.id)
        return Result.success()

    @write_operation
    def delete_apiary(self, apiary_id: int) -> Result[int]:
        """
        Delete an apiary together with its hives and their records.

        Returns the number of records removed.
        """
        with self.database.transaction():
            if not self.repository.exists(apiary_id):
                raise DataUnavailable(f"apiary {apiary_id} not found")
            deleted = self._cascade_delete([apiary_id])
        logger.info("Deleted apiary %s (%d records)", apiary_id, deleted)
        return Result.success(deleted)

    @write_operation
    def delete_all_apiaries(self) -> Result[int]:
        """Delete every apiary, cascading exactly like delete_apiary()."""
        with self.database.transaction():
            deleted = self._cascade_delete(self.repository.list_ids())
        logger.info("Deleted all apiaries (%d records)", deleted)
        return Result.success(deleted)

    @read_operation
    def get_next_apiary_id(self) -> Result[int]:
        """
        Id to use for a new apiary. Not reserved: two callers can be handed
        the same value.
        """
        return Result.success(self.repository.next_id())

    def _cascade_delete(self, apiary_ids: List[int]) -> int:
        # Collect the whole tree first, then delete one level at a time, parents last
        hive_ids = self.hives.list_ids_by_apiaries(apiary_ids)
        deleted = self.records.delete_by_hive_ids(hive_ids)
        self.hives.delete_by_ids(hive_ids)
        self.repository.delete_by_ids(apiary_ids)
        return deleted
