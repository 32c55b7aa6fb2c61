import logging

from beeyard.apiary.service import ApiaryService
from beeyard.db import Database
from beeyard.hive.service import HiveService
from beeyard.record.service import RecordService
from beeyard.recording.service import RecordingService
from beeyard.result import Result, write_operation

logger = logging.getLogger(__name__)


class DataService:
    """
    Single entry point over every operation family, sharing one Database.

    The caller owns the lifecycle:

        with DataService(Database(config.database_url)) as data:
            data.hives.get_hive_with_recordings(3)
    """

    def __init__(self, database: Database):
        self.database = database
        self.apiaries = ApiaryService(database)
        self.hives = HiveService(database)
        self.records = RecordService(database)
        self.recordings = RecordingService(database)

    def open(self) -> "DataService":
        self.database.open()
        return self

    def close(self) -> None:
        self.database.close()

    def __enter__(self) -> "DataService":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @write_operation
    def delete_all(self) -> Result[None]:
        """Wipe every record, hive and apiary in one transaction."""
        with self.database.transaction():
            records = self.records.repository.delete_all()
            hives = self.hives.repository.delete_all()
            apiaries = self.apiaries.repository.delete_all()
        logger.warning(
            "Deleted all data: %d apiaries, %d hives, %d records", apiaries, hives, records
        )
        return Result.success()
