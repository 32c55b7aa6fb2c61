from flask import Blueprint, request

from beeyard.api import BadRequest, bad_request, data_service, respond
from beeyard.api.payloads import parse_apiary, parse_hive

bp = Blueprint("apiaries", __name__)


@bp.route("", methods=["GET"])
def list_apiaries():
    """List all apiaries."""
    return respond(data_service().apiaries.get_apiaries())


@bp.route("", methods=["POST"])
def create_apiary():
    """Create or replace an apiary; the body carries its id."""
    try:
        apiary = parse_apiary(request.get_json(silent=True))
    except BadRequest as e:
        return bad_request(e)
    return respond(data_service().apiaries.save_apiary(apiary), payload=apiary, success_code=201)


@bp.route("", methods=["DELETE"])
def delete_all_apiaries():
    """Delete every apiary with its hives and records."""
    result = data_service().apiaries.delete_all_apiaries()
    return respond(result, payload={"records_deleted": result.value})


@bp.route("/next-id", methods=["GET"])
def next_apiary_id():
    return respond(data_service().apiaries.get_next_apiary_id())


@bp.route("/<int:apiary_id>", methods=["GET"])
def get_apiary(apiary_id: int):
    """Get apiary by ID."""
    return respond(data_service().apiaries.get_apiary(apiary_id))


@bp.route("/<int:apiary_id>", methods=["PUT"])
def update_apiary(apiary_id: int):
    try:
        apiary = parse_apiary(request.get_json(silent=True), apiary_id=apiary_id)
    except BadRequest as e:
        return bad_request(e)
    return respond(data_service().apiaries.save_apiary(apiary), payload=apiary)


@bp.route("/<int:apiary_id>", methods=["DELETE"])
def delete_apiary(apiary_id: int):
    """Delete an apiary with its hives and records."""
    result = data_service().apiaries.delete_apiary(apiary_id)
    return respond(result, payload={"records_deleted": result.value})


@bp.route("/<int:apiary_id>/hives", methods=["GET"])
def list_hives(apiary_id: int):
    """List the hives of an apiary."""
    return respond(data_service().hives.get_hives(apiary_id))


@bp.route("/<int:apiary_id>/hives", methods=["POST"])
def save_hive(apiary_id: int):
    """Create or replace a hive inside an apiary."""
    try:
        hive = parse_hive(request.get_json(silent=True))
    except BadRequest as e:
        return bad_request(e)
    return respond(data_service().hives.save_hive(apiary_id, hive), success_code=201)
