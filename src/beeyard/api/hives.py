from flask import Blueprint, request

from beeyard.api import BadRequest, bad_request, data_service, respond
from beeyard.api.payloads import parse_record, parse_records

bp = Blueprint("hives", __name__)


@bp.route("/next-id", methods=["GET"])
def next_hive_id():
    return respond(data_service().hives.get_next_hive_id())


@bp.route("/<int:hive_id>", methods=["GET"])
def get_hive(hive_id: int):
    """Get hive by ID. ?recordings=true also groups its records by day."""
    hives = data_service().hives
    if request.args.get("recordings", "false").lower() == "true":
        result = hives.get_hive_with_recordings(hive_id)
        payload = result.value.to_dict(include_recordings=True) if result.is_success else None
        return respond(result, payload=payload)
    return respond(hives.get_hive(hive_id))


@bp.route("/<int:hive_id>", methods=["DELETE"])
def delete_hive(hive_id: int):
    """Delete a hive and its records."""
    result = data_service().hives.delete_hive(hive_id)
    return respond(result, payload={"records_deleted": result.value})


@bp.route("/<int:hive_id>/records", methods=["POST"])
def save_record(hive_id: int):
    """Create or replace a single record by id."""
    try:
        record = parse_record(request.get_json(silent=True))
    except BadRequest as e:
        return bad_request(e)
    return respond(data_service().records.save_record(hive_id, record), success_code=201)


@bp.route("/<int:hive_id>/records/batch", methods=["POST"])
def save_records(hive_id: int):
    """Store a batch of new records; ids are assigned by the server."""
    try:
        records = parse_records(request.get_json(silent=True))
    except BadRequest as e:
        return bad_request(e)
    return respond(data_service().records.save_records(hive_id, records), success_code=201)
