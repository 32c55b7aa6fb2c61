from typing import List, Optional

from beeyard.db import Database
from beeyard.models import Apiary


class ApiaryRepository:
    """
    Repository for apiary data access.
    Encapsulates all SQL and queries for the apiaries table.
    """

    def __init__(self, database: Database):
        self.database = database

    def list(self) -> List[Apiary]:
        """List all apiaries ordered by id."""
        rows = self.database.fetch_all("SELECT * FROM apiaries ORDER BY id")
        return [Apiary.from_row(row) for row in rows]

    def get_by_id(self, apiary_id: int) -> Optional[Apiary]:
        """Get apiary by ID."""
        row = self.database.fetch_one("SELECT * FROM apiaries WHERE id = %s", (apiary_id,))
        return Apiary.from_row(row) if row else None

    def exists(self, apiary_id: int) -> bool:
        return self.database.fetch_one("SELECT 1 FROM apiaries WHERE id = %s", (apiary_id,)) is not None

    def list_ids(self) -> List[int]:
        rows = self.database.fetch_all("SELECT id FROM apiaries ORDER BY id")
        return [row["id"] for row in rows]

    def upsert(self, apiary: Apiary) -> None:
        """Insert the apiary, or replace every field of the one with the same id."""
        self.database.execute(
            """
            INSERT INTO apiaries
                (id, name, location_lat, location_long, notes, image_url, last_revision)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE SET
                name = EXCLUDED.name,
                location_lat = EXCLUDED.location_lat,
                location_long = EXCLUDED.location_long,
                notes = EXCLUDED.notes,
                image_url = EXCLUDED.image_url,
                last_revision = EXCLUDED.last_revision
            """,
            (
                apiary.id,
                apiary.name,
                apiary.location_lat,
                apiary.location_long,
                apiary.notes,
                apiary.image_url,
                apiary.last_revision,
            ),
        )

    def delete_by_ids(self, apiary_ids: List[int]) -> int:
        """Delete apiaries by id. Their hives must already be gone."""
        if not apiary_ids:
            return 0
        return self.database.execute("DELETE FROM apiaries WHERE id = ANY(%s)", (list(apiary_ids),))

    def next_id(self) -> int:
        """One past the highest id in use, or 0 for an empty table."""
        max_id = self.database.fetch_value("SELECT MAX(id) AS max_id FROM apiaries")
        return 0 if max_id is None else max_id + 1

    def delete_all(self) -> int:
        return self.database.execute("DELETE FROM apiaries")
