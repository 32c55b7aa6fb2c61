from datetime import datetime
from typing import Iterable, List

import pandas as pd

from beeyard.db import Database
from beeyard.models import Record

RECORD_COLUMNS = "id, hive_id, timestamp, num_bees, temperature, humidity, weather"

UPSERT_RECORD = """
    INSERT INTO records (id, hive_id, timestamp, num_bees, temperature, humidity, weather)
    VALUES (%s, %s, %s, %s, %s, %s, %s)
    ON CONFLICT (id) DO UPDATE SET
        hive_id = EXCLUDED.hive_id,
        timestamp = EXCLUDED.timestamp,
        num_bees = EXCLUDED.num_bees,
        temperature = EXCLUDED.temperature,
        humidity = EXCLUDED.humidity,
        weather = EXCLUDED.weather
"""


def _params(record: Record) -> tuple:
    return (
        record.id,
        record.hive_id,
        record.timestamp,
        record.num_bees,
        record.temperature,
        record.humidity,
        record.weather,
    )


def _range_query(hive_id: int, start: datetime = None, end: datetime = None) -> tuple[str, tuple]:
    query = f"SELECT {RECORD_COLUMNS} FROM records WHERE hive_id = %s"
    params = [hive_id]

    if start:
        query += " AND timestamp >= %s"
        params.append(start)
    if end:
        query += " AND timestamp <= %s"
        params.append(end)

    # id breaks ties between equal timestamps in insertion order
    query += " ORDER BY timestamp, id"

    return query, tuple(params)


class RecordRepository:
    """
    Repository for sensor record data access.
    Encapsulates all SQL and queries for the records table.
    """

    def __init__(self, database: Database):
        self.database = database

    def find(self, hive_id: int, start: datetime = None, end: datetime = None) -> List[Record]:
        """
        Records of a hive sorted by timestamp, optionally bounded by the
        inclusive range ``[start, end]``.
        """
        query, params = _range_query(hive_id, start, end)
        return [Record.from_row(row) for row in self.database.fetch_all(query, params)]

    def find_dataframe(
        self, hive_id: int, start: datetime = None, end: datetime = None
    ) -> pd.DataFrame:
        """Same selection as find(), as a pandas DataFrame."""
        query, params = _range_query(hive_id, start, end)
        return self.database.fetch_dataframe(query, params)

    def count(self, hive_id: int) -> int:
        return self.database.fetch_value(
            "SELECT COUNT(*) AS n FROM records WHERE hive_id = %s", (hive_id,)
        )

    def upsert(self, record: Record) -> None:
        """Insert the record, or replace every field of the one with the same id."""
        self.database.execute(UPSERT_RECORD, _params(record))

    def upsert_many(self, records: List[Record]) -> int:
        """Upsert a batch of records. Returns the count processed."""
        return self.database.execute_many(UPSERT_RECORD, [_params(r) for r in records])

    def delete_by_hive_ids(self, hive_ids: Iterable[int]) -> int:
        """Delete every record owned by any of the given hives."""
        hive_ids = list(hive_ids)
        if not hive_ids:
            return 0
        return self.database.execute("DELETE FROM records WHERE hive_id = ANY(%s)", (hive_ids,))

    def delete_range(self, hive_id: int, start: datetime, end: datetime) -> int:
        """Delete the hive's records with ``start <= timestamp <= end``."""
        return self.database.execute(
            "DELETE FROM records WHERE hive_id = %s AND timestamp >= %s AND timestamp <= %s",
            (hive_id, start, end),
        )

    def delete_all(self) -> int:
        return self.database.execute("DELETE FROM records")

    def next_id(self) -> int:
        """One past the highest id across all hives, or 0 when there are no records."""
        max_id = self.database.fetch_value("SELECT MAX(id) AS max_id FROM records")
        return 0 if max_id is None else max_id + 1
