"""In-memory alert registry that drives lifecycle transitions and notifications."""
import logging
import threading

from alerts import lifecycle
from models.alerts import Action, PluginMessage
from models.enums import Status
from models.exceptions import Conflict, NotFound, ValidationError

logger = logging.getLogger("alertsvc.alerts.service")


class AlertsService:
    """Keeps alerts by id and notifies channels after every lifecycle change.

    ``actions`` is the configured list of notification actions, each a dict
    with ``plugin``, ``id`` and string ``properties``. One Action per entry is
    built for every new alert and every successful transition.
    """

    def __init__(self, channels=None, actions=None):
        self.channels = channels or []
        self.actions = [self._parse_action(a) for a in (actions or [])]
        self._alerts = {}
        self._lock = threading.Lock()

    @staticmethod
    def _parse_action(raw):
        if not raw.get("plugin") or not raw.get("id"):
            raise ValidationError(f"Action needs 'plugin' and 'id': {raw!r}")
        props = {str(k): str(v) for k, v in (raw.get("properties") or {}).items() if v is not None}
        return raw["plugin"], raw["id"], props

    def add_alert(self, alert):
        with self._lock:
            if alert.alert_id in self._alerts:
                raise Conflict(f"Alert {alert.alert_id} already exists")
            self._alerts[alert.alert_id] = alert
        self._dispatch(alert)
        return alert

    def get_alert(self, alert_id):
        with self._lock:
            return self._alerts.get(alert_id)

    def get_alerts(self, status=None, trigger_id=None):
        if status is not None:
            try:
                status = Status(status)
            except ValueError as e:
                raise ValidationError(f"Unknown alert status: {status!r}") from e
        with self._lock:
            alerts = list(self._alerts.values())
        if status is not None:
            alerts = [a for a in alerts if a.status == status]
        if trigger_id:
            alerts = [a for a in alerts if a.trigger_id == trigger_id]
        return sorted(alerts, key=lambda a: a.ctime)

    def _require(self, alert_id):
        alert = self.get_alert(alert_id)
        if alert is None:
            raise NotFound(f"Alert {alert_id} not found")
        return alert

    def acknowledge(self, alert_id, ack_by, notes=None, timestamp=None):
        alert = lifecycle.acknowledge(self._require(alert_id), ack_by, timestamp, notes)
        self._dispatch(alert)
        return alert

    def resolve(self, alert_id, resolved_by, notes=None, resolved_eval_sets=None, timestamp=None):
        alert = lifecycle.resolve(self._require(alert_id), resolved_by, timestamp, notes,
                                  resolved_eval_sets)
        self._dispatch(alert)
        return alert

    def _dispatch(self, alert):
        for plugin, action_id, props in self.actions:
            message = PluginMessage(Action(alert.tenant_id, plugin, action_id, alert), dict(props))
            for channel in self.channels:
                try:
                    channel.send(message)
                except Exception as e:
                    logger.warning(f"Channel dispatch error for {alert.alert_id} "
                                   f"via {type(channel).__name__}: {e}")
