"""Parsing of request bodies into entities."""

from datetime import datetime

from beeyard.api import BadRequest
from beeyard.dates import to_wall_clock
from beeyard.models import Apiary, Hive, Record


def _body(data) -> dict:
    if not isinstance(data, dict):
        raise BadRequest("expected a JSON object")
    return data


def _int(data: dict, key: str, default=None) -> int:
    value = data.get(key, default)
    if value is None:
        raise BadRequest(f"'{key}' is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"'{key}' must be an integer")


def _datetime(data: dict, key: str, required: bool = False):
    value = data.get(key)
    if value is None:
        if required:
            raise BadRequest(f"'{key}' is required")
        return None
    try:
        return to_wall_clock(datetime.fromisoformat(value))
    except (TypeError, ValueError):
        raise BadRequest(f"'{key}' must be an ISO 8601 timestamp")


def parse_apiary(data, apiary_id: int = None) -> Apiary:
    data = _body(data)
    return Apiary(
        id=apiary_id if apiary_id is not None else _int(data, "id"),
        name=data.get("name", ""),
        location_lat=data.get("location_lat"),
        location_long=data.get("location_long"),
        notes=data.get("notes"),
        image_url=data.get("image_url"),
        last_revision=_datetime(data, "last_revision"),
    )


def parse_hive(data) -> Hive:
    data = _body(data)
    return Hive(
        id=_int(data, "id"),
        name=data.get("name", ""),
        notes=data.get("notes"),
        image_url=data.get("image_url"),
        last_revision=_datetime(data, "last_revision"),
    )


def parse_record(data, require_id: bool = True) -> Record:
    data = _body(data)
    return Record(
        id=_int(data, "id") if require_id else -1,
        timestamp=_datetime(data, "timestamp", required=True),
        num_bees=data.get("num_bees"),
        temperature=data.get("temperature"),
        humidity=data.get("humidity"),
        weather=data.get("weather"),
    )


def parse_records(data) -> list[Record]:
    if not isinstance(data, list):
        raise BadRequest("expected a JSON array of records")
    return [parse_record(item, require_id=False) for item in data]
