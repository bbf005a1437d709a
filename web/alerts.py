"""REST resources for alerts and their lifecycle transitions."""
import logging

from flask import Blueprint, jsonify, request

from alerts import lifecycle
from models.conditions import condition_from_dict
from models.data import data_from_dict
from models.evals import build_eval
from models.exceptions import ValidationError

logger = logging.getLogger("alertsvc.web.alerts")


def parse_eval_sets(raw):
    """Build evaluation sets from ``[[{"condition": {...}, "data": {...}}, ...], ...]``."""
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValidationError("Evaluation sets must be a list of lists")
    sets = []
    for group in raw:
        if not isinstance(group, list):
            raise ValidationError("Each evaluation set must be a list")
        evals = set()
        for item in group:
            if not isinstance(item, dict):
                raise ValidationError("Each evaluation needs a 'condition' and a 'data' object")
            evals.add(build_eval(condition_from_dict(item.get("condition")),
                                 data_from_dict(item.get("data") or {})))
        sets.append(evals)
    return sets


def alerts_blueprint(service) -> Blueprint:
    bp = Blueprint("alerts", __name__, url_prefix="/alerts")

    @bp.route("/", methods=["GET"])
    def find_alerts():
        alerts = service.get_alerts(status=request.args.get("status"),
                                    trigger_id=request.args.get("triggerId"))
        if not alerts:
            logger.debug("GET - findAlerts - Empty")
            return "", 204
        logger.debug(f"GET - findAlerts - {len(alerts)} alerts")
        return jsonify([a.to_dict() for a in alerts])

    @bp.route("/", methods=["POST"])
    def create_alert():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError("Alert payload must be a JSON object")
        alert = lifecycle.new_alert(
            payload.get("tenantId") or "",
            payload.get("triggerId"),
            payload.get("severity"),
            parse_eval_sets(payload.get("evalSets")),
        )
        service.add_alert(alert)
        logger.debug(f"POST - createAlert - alertId {alert.alert_id}")
        return jsonify(alert.to_dict())

    @bp.route("/<alert_id>", methods=["GET"])
    def get_alert(alert_id):
        alert = service.get_alert(alert_id)
        if alert is None:
            logger.debug(f"GET - getAlert - alertId: {alert_id} not found")
            return jsonify({"errorMsg": f"Alert ID {alert_id} not found"}), 404
        return jsonify(alert.to_dict())

    @bp.route("/ack/<alert_id>", methods=["PUT"])
    def ack_alert(alert_id):
        alert = service.acknowledge(alert_id,
                                    request.args.get("ackBy", "unknown"),
                                    notes=request.args.get("ackNotes"))
        logger.debug(f"PUT - ackAlert - alertId: {alert_id}")
        return jsonify(alert.to_dict())

    @bp.route("/resolve/<alert_id>", methods=["PUT"])
    def resolve_alert(alert_id):
        payload = request.get_json(silent=True) or {}
        resolved_sets = parse_eval_sets(payload.get("resolvedEvalSets"))
        alert = service.resolve(alert_id,
                                request.args.get("resolvedBy", "unknown"),
                                notes=request.args.get("resolvedNotes"),
                                resolved_eval_sets=resolved_sets)
        logger.debug(f"PUT - resolveAlert - alertId: {alert_id}")
        return jsonify(alert.to_dict())

    return bp
