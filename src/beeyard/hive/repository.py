from typing import Iterable, List, Optional

from beeyard.db import Database
from beeyard.models import Hive


class HiveRepository:
    """
    Repository for hive data access.
    Encapsulates all SQL and queries for the hives table.
    """

    def __init__(self, database: Database):
        self.database = database

    def list_by_apiary(self, apiary_id: int) -> List[Hive]:
        """List the hives of an apiary ordered by id."""
        rows = self.database.fetch_all(
            "SELECT * FROM hives WHERE apiary_id = %s ORDER BY id", (apiary_id,)
        )
        return [Hive.from_row(row) for row in rows]

    def get_by_id(self, hive_id: int) -> Optional[Hive]:
        """Get hive by ID."""
        row = self.database.fetch_one("SELECT * FROM hives WHERE id = %s", (hive_id,))
        return Hive.from_row(row) if row else None

    def exists(self, hive_id: int) -> bool:
        return self.database.fetch_one("SELECT 1 FROM hives WHERE id = %s", (hive_id,)) is not None

    def list_ids_by_apiaries(self, apiary_ids: Iterable[int]) -> List[int]:
        """Ids of every hive owned by any of the given apiaries."""
        apiary_ids = list(apiary_ids)
        if not apiary_ids:
            return []
        rows = self.database.fetch_all(
            "SELECT id FROM hives WHERE apiary_id = ANY(%s) ORDER BY id", (apiary_ids,)
        )
        return [row["id"] for row in rows]

    def upsert(self, hive: Hive) -> None:
        """Insert the hive, or replace every field of the one with the same id."""
        self.database.execute(
            """
            INSERT INTO hives (id, apiary_id, name, notes, image_url, last_revision)
            VALUES (%s, %s, %s, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE SET
                apiary_id = EXCLUDED.apiary_id,
                name = EXCLUDED.name,
                notes = EXCLUDED.notes,
                image_url = EXCLUDED.image_url,
                last_revision = EXCLUDED.last_revision
            """,
            (hive.id, hive.apiary_id, hive.name, hive.notes, hive.image_url, hive.last_revision),
        )

    def delete_by_ids(self, hive_ids: Iterable[int]) -> int:
        """Delete hives by id. Their records must already be gone."""
        hive_ids = list(hive_ids)
        if not hive_ids:
            return 0
        return self.database.execute("DELETE FROM hives WHERE id = ANY(%s)", (hive_ids,))

    def next_id(self) -> int:
        """One past the highest id in use, or 0 for an empty table."""
        max_id = self.database.fetch_value("SELECT MAX(id) AS max_id FROM hives")
        return 0 if max_id is None else max_id + 1

    def delete_all(self) -> int:
        return self.database.execute("DELETE FROM hives")
