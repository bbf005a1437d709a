"""
Flask REST service for condition definitions and alerts.

Endpoints:
  /conditions/<kind>/            - GET list (204 when empty), POST create
  /conditions/<kind>/<id>        - GET, PUT, DELETE
      kind: string, threshold, range, availability
  /alerts/                       - GET list (status, triggerId filters), POST create
  /alerts/<alertId>              - GET
  /alerts/ack/<alertId>          - PUT acknowledge (ackBy, ackNotes)
  /alerts/resolve/<alertId>      - PUT resolve (resolvedBy, resolvedNotes)
  /status                        - GET service status

Started via: alertsvc serve [--port 8080] [--host 0.0.0.0]
"""
import logging

from flask import Flask, jsonify

from __version__ import __version__
from models.conditions import CONDITION_KINDS
from models.exceptions import AlertsError, NotFound
from web.alerts import alerts_blueprint
from web.conditions import conditions_blueprint

logger = logging.getLogger("alertsvc.web.app")


def create_app(config: dict, engines: dict) -> Flask:
    """
    Factory function. Receives initialized engines from main.py CLI or wsgi.py.

    Args:
        config: Application config dict
        engines: dict with ``definitions`` (a definitions store) and ``alerts``
                 (an AlertsService)
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    for kind in CONDITION_KINDS:
        app.register_blueprint(conditions_blueprint(kind, engines["definitions"]))
    app.register_blueprint(alerts_blueprint(engines["alerts"]))

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        logger.debug(f"Not found: {e}")
        return jsonify({"errorMsg": str(e)}), 404

    @app.errorhandler(AlertsError)
    def handle_alerts_error(e):
        logger.debug(f"Bad request ({type(e).__name__}): {e}")
        return jsonify({"errorMsg": str(e)}), 400

    @app.route("/status")
    def status():
        return jsonify({"status": "STARTED", "version": __version__})

    return app
