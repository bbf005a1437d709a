"""Alert lifecycle: OPEN -> ACKNOWLEDGED -> RESOLVED.

OPEN is the initial state and RESOLVED is terminal. ACKNOWLEDGED is optional;
an alert may be resolved straight from OPEN. Transitions on one alert hold that
alert's lock, so concurrent acknowledge/resolve calls are serialized and the
loser sees InvalidTransition.

The firing evaluation sets are frozen at creation. Resolution only adds the
separate resolved evaluation sets (the AUTORESOLVE evaluations that cleared the
alert). Those are optional: a manual resolve may carry none.
"""
import logging
import threading

from models.alerts import Alert
from models.enums import Severity, Status
from models.evals import check_eval_sets
from models.exceptions import InvalidTransition, ValidationError
from utils.formatters import now_ms

logger = logging.getLogger("alertsvc.alerts.lifecycle")

ACKNOWLEDGEABLE = {Status.OPEN}
RESOLVABLE = {Status.OPEN, Status.ACKNOWLEDGED}

_last_ctime = {}
_ctime_lock = threading.Lock()


def _next_ctime(trigger_id):
    """Current time in ms, bumped past the last ctime issued for this trigger."""
    with _ctime_lock:
        ctime = max(now_ms(), _last_ctime.get(trigger_id, 0) + 1)
        _last_ctime[trigger_id] = ctime
    return ctime


def new_alert(tenant_id, trigger_id, severity, firing_eval_sets,
              ctime=None, trigger=None, dampening=None) -> Alert:
    """Create an OPEN alert from the evaluation sets that fired it."""
    if not trigger_id:
        raise ValidationError("An alert needs a trigger id")
    try:
        severity = Severity(severity) if severity else Severity.MEDIUM
    except ValueError as e:
        raise ValidationError(f"Unknown severity: {severity!r}") from e
    sets = check_eval_sets(firing_eval_sets, "firing evaluation")
    alert = Alert(
        tenant_id=tenant_id,
        trigger_id=trigger_id,
        severity=severity,
        eval_sets=sets,
        ctime=ctime if ctime is not None else _next_ctime(trigger_id),
        trigger=trigger,
        dampening=dampening,
    )
    logger.info(f"Alert {alert.alert_id} opened ({len(sets)} evaluation set(s))")
    return alert


def alert_from_trigger(trigger, firing_eval_sets, dampening=None, ctime=None) -> Alert:
    """Create an OPEN alert, copying tenant, id and severity from ``trigger``."""
    return new_alert(trigger.tenant_id, trigger.id, trigger.severity, firing_eval_sets,
                     ctime=ctime, trigger=trigger, dampening=dampening)


def acknowledge(alert: Alert, actor, timestamp=None, notes=None) -> Alert:
    with alert.lock:
        if alert.status not in ACKNOWLEDGEABLE:
            raise InvalidTransition(
                f"Alert {alert.alert_id} is {alert.status.value}; only OPEN alerts can be acknowledged")
        alert.ack_by = actor
        alert.ack_time = timestamp if timestamp is not None else now_ms()
        alert.ack_notes = notes
        alert.status = Status.ACKNOWLEDGED
    logger.info(f"Alert {alert.alert_id} acknowledged by {actor}")
    return alert


def resolve(alert: Alert, actor, timestamp=None, notes=None, resolved_eval_sets=None) -> Alert:
    resolved = None
    if resolved_eval_sets is not None:
        resolved_eval_sets = tuple(resolved_eval_sets)
    if resolved_eval_sets:
        resolved = check_eval_sets(resolved_eval_sets, "resolved evaluation")

    with alert.lock:
        if alert.status not in RESOLVABLE:
            raise InvalidTransition(
                f"Alert {alert.alert_id} is already {alert.status.value}")
        alert.resolved_by = actor
        alert.resolved_time = timestamp if timestamp is not None else now_ms()
        alert.resolved_notes = notes
        alert.resolved_eval_sets = resolved
        alert.status = Status.RESOLVED
    logger.info(f"Alert {alert.alert_id} resolved by {actor}")
    return alert
