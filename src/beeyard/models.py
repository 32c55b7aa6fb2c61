"""
Domain entities.

Apiary, Hive and Record map one-to-one onto the tables in
``migrations/001_initial_schema.sql``. Recording is never stored: it is
produced by the aggregator and by range queries.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime
from typing import List, Optional

import pandas as pd


def _from_row(cls, row: dict):
    names = {f.name for f in fields(cls) if f.init}
    return cls(**{k: v for k, v in row.items() if k in names})


@dataclass
class Apiary:
    id: int
    name: str = ""
    location_lat: Optional[float] = None
    location_long: Optional[float] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    last_revision: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "Apiary":
        return _from_row(cls, row)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Record:
    id: int
    timestamp: datetime
    hive_id: Optional[int] = None
    num_bees: Optional[int] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    weather: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Record":
        return _from_row(cls, row)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Recording:
    """All records of one hive that fall on ``date``, in timestamp order."""

    date: date
    records: List[Record] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "records": [r.to_dict() for r in self.records],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Records as a DataFrame, one row per record."""
        columns = [f.name for f in fields(Record)]
        return pd.DataFrame([r.to_dict() for r in self.records], columns=columns)


@dataclass
class Hive:
    id: int
    apiary_id: Optional[int] = None
    name: str = ""
    notes: Optional[str] = None
    image_url: Optional[str] = None
    last_revision: Optional[datetime] = None
    # Derived on demand by HiveService.get_hive_with_recordings; never persisted
    recordings: List[Recording] = field(default_factory=list, compare=False)

    @classmethod
    def from_row(cls, row: dict) -> "Hive":
        return _from_row(cls, row)

    def to_dict(self, include_recordings: bool = False) -> dict:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "recordings"}
        if include_recordings:
            data["recordings"] = [r.to_dict() for r in self.recordings]
        return data
