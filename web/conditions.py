"""REST resources for condition definitions, one blueprint per condition variant.

The store holds every variant; each blueprint only sees its own. A condition
of another variant under the same id is reported as not found.
"""
import logging

from flask import Blueprint, jsonify, request

from models.conditions import CONDITION_KINDS, condition_from_dict
from models.exceptions import Conflict, ValidationError

logger = logging.getLogger("alertsvc.web.conditions")

CREATE_ERROR = "Existing condition or invalid ID"


def _not_found(condition_id):
    return jsonify({"errorMsg": f"Condition ID {condition_id} not found or invalid ID"}), 404


def conditions_blueprint(kind: str, definitions) -> Blueprint:
    """Build the ``/conditions/<kind>`` resource over ``definitions``."""
    cond_type = CONDITION_KINDS[kind]
    bp = Blueprint(f"{kind}_conditions", __name__, url_prefix=f"/conditions/{kind}")

    def _find(condition_id):
        if not condition_id:
            return None
        found = definitions.get_condition(condition_id)
        if found is not None and found.type != cond_type:
            logger.debug(f"GET - {kind} - conditionId: {condition_id} found "
                         f"but it is a {found.type.value} condition")
            return None
        return found

    @bp.route("/", methods=["GET"])
    def find_all():
        conditions = [c for c in definitions.get_conditions() if c.type == cond_type]
        if not conditions:
            logger.debug(f"GET - findAll {kind} conditions - Empty")
            return "", 204
        logger.debug(f"GET - findAll {kind} conditions - {len(conditions)} conditions")
        return jsonify([c.to_dict() for c in conditions])

    @bp.route("/", methods=["POST"])
    def create():
        payload = request.get_json(silent=True)
        if payload is None:
            logger.debug(f"POST - create {kind} condition - no body")
            return jsonify({"errorMsg": CREATE_ERROR}), 400

        try:
            condition = condition_from_dict(payload, expected_type=cond_type)
        except ValidationError as e:
            logger.debug(f"POST - create {kind} condition - invalid payload: {e}")
            return jsonify({"errorMsg": CREATE_ERROR}), 400
        if not condition.condition_id or definitions.get_condition(condition.condition_id) is not None:
            logger.debug(f"POST - create {kind} condition - ID not valid or existing condition")
            return jsonify({"errorMsg": CREATE_ERROR}), 400
        try:
            definitions.add_condition(condition)
        except Conflict:
            logger.debug(f"POST - create {kind} condition - lost race for {condition.condition_id}")
            return jsonify({"errorMsg": CREATE_ERROR}), 400

        logger.debug(f"POST - create {kind} condition - conditionId {condition.condition_id}")
        return jsonify(condition.to_dict())

    @bp.route("/<condition_id>", methods=["GET"])
    def get_one(condition_id):
        found = _find(condition_id)
        if found is None:
            logger.debug(f"GET - {kind} - conditionId: {condition_id} not found or invalid")
            return _not_found(condition_id)
        logger.debug(f"GET - {kind} - conditionId: {condition_id}")
        return jsonify(found.to_dict())

    @bp.route("/<condition_id>", methods=["PUT"])
    def update(condition_id):
        payload = request.get_json(silent=True)
        if payload is None:
            return _not_found(condition_id)

        condition = condition_from_dict(payload, expected_type=cond_type)
        if condition.condition_id != condition_id or _find(condition_id) is None:
            logger.debug(f"PUT - {kind} - conditionId: {condition_id} not found or invalid")
            return _not_found(condition_id)

        definitions.update_condition(condition)
        logger.debug(f"PUT - {kind} - conditionId: {condition_id}")
        return "", 200

    @bp.route("/<condition_id>", methods=["DELETE"])
    def delete(condition_id):
        if _find(condition_id) is None:
            logger.debug(f"DELETE - {kind} - conditionId: {condition_id} not found or invalid")
            return _not_found(condition_id)

        definitions.remove_condition(condition_id)
        logger.debug(f"DELETE - {kind} - conditionId: {condition_id}")
        return "", 200

    return bp
