from flask import Blueprint, request

from beeyard.api import BadRequest, bad_request, data_service, respond
from beeyard.dates import as_date
from beeyard.models import Recording

bp = Blueprint("recordings", __name__)


def _parse_date(value, name: str):
    if not value:
        raise BadRequest(f"'{name}' is required")
    try:
        return as_date(value)
    except ValueError:
        raise BadRequest(f"'{name}' must be an ISO date")


@bp.route("/<int:hive_id>/recording", methods=["GET"])
def get_recording(hive_id: int):
    """Records of a hive between ?start= and ?end= (whole days, inclusive)."""
    try:
        start = _parse_date(request.args.get("start"), "start")
        end = _parse_date(request.args.get("end", request.args.get("start")), "end")
    except BadRequest as e:
        return bad_request(e)
    return respond(data_service().recordings.get_recording(hive_id, start, end))


@bp.route("/<int:hive_id>/recordings/<day>", methods=["GET"])
def get_day(hive_id: int, day: str):
    """Records of a hive on one day."""
    try:
        day = _parse_date(day, "day")
    except BadRequest as e:
        return bad_request(e)
    return respond(data_service().recordings.get_recording(hive_id, day, day))


@bp.route("/<int:hive_id>/recordings/<day>", methods=["DELETE"])
def delete_day(hive_id: int, day: str):
    """Delete every record of a hive on one day."""
    try:
        day = _parse_date(day, "day")
    except BadRequest as e:
        return bad_request(e)
    result = data_service().recordings.delete_recording(hive_id, Recording(day))
    return respond(result, payload={"date": day, "records_deleted": result.value})
