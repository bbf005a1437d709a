"""Reference alert scenarios for threshold, availability and two-condition triggers.

Each builder returns a fresh alert walked through the lifecycle up to the
requested status. They back the ``email render`` CLI command and the tests.
"""
from alerts import lifecycle
from models.alerts import Action, PluginMessage
from models.conditions import AvailabilityCondition, ThresholdCondition
from models.data import Availability, NumericData
from models.enums import (
    AvailabilityOperator,
    AvailabilityType,
    Mode,
    Status,
    ThresholdOperator,
)
from models.evals import eval_sets
from models.exceptions import ValidationError
from models.trigger import Dampening, Trigger
from utils.formatters import now_ms

TENANT_ID = "test-tenant"
RT_TRIGGER_ID = "rt-trigger-jboss"
RT_DATA_ID = "rt-jboss-data"
AV_TRIGGER_ID = "av-trigger-jboss"
AV_DATA_ID = "av-jboss-data"
MIX_TRIGGER_ID = "mix-trigger-jboss"

ACK_BY = "Test ACK user"
ACK_NOTES = "Test ACK notes"
RESOLVED_BY = "Test RESOLVED user"
RESOLVED_NOTES = "Test RESOLVED notes"


def default_properties():
    return {
        "to": "admin@hawkular.org",
        "cc": "bigboss@hawkular.org",
        "cc.acknowledged": "acknowledged@hawkular.org",
        "cc.resolved": "resolved@hawkular.org",
        "description": "This is an example of Email Action Plugin",
        "template.hawkular.url": "http://www.hawkular.org",
    }


def _trigger(trigger_id, tenant_id):
    return Trigger(trigger_id, "http://www.jboss.org", tenant_id=tenant_id)


def _threshold(trigger_id, tenant_id, mode, operator):
    return ThresholdCondition(trigger_id=trigger_id, trigger_mode=mode, data_id=RT_DATA_ID,
                              tenant_id=tenant_id, operator=operator, threshold=1000.0)


def _availability(trigger_id, tenant_id, mode, operator):
    return AvailabilityCondition(trigger_id=trigger_id, trigger_mode=mode, data_id=AV_DATA_ID,
                                 tenant_id=tenant_id, operator=operator)


def _walk(alert, status, resolved_sets, now, ack_first=False):
    status = Status(status)
    if status == Status.ACKNOWLEDGED or (status == Status.RESOLVED and ack_first):
        lifecycle.acknowledge(alert, ACK_BY, now + 10000, ACK_NOTES)
    if status == Status.RESOLVED:
        lifecycle.resolve(alert, RESOLVED_BY, now + 20000, RESOLVED_NOTES, resolved_sets)
    return alert


def threshold_alert(status=Status.OPEN, tenant_id=TENANT_ID, now=None):
    """``rt-jboss-data > 1000`` fired on 1001, cleared by ``<= 1000`` on 998."""
    now = now if now is not None else now_ms()
    trigger = _trigger(RT_TRIGGER_ID, tenant_id)
    firing = _threshold(RT_TRIGGER_ID, tenant_id, Mode.FIRING, ThresholdOperator.GT)
    resolve = _threshold(RT_TRIGGER_ID, tenant_id, Mode.AUTORESOLVE, ThresholdOperator.LTE)
    dampening = Dampening.for_strict_time(RT_TRIGGER_ID, Mode.FIRING, 10000)

    bad = NumericData(RT_DATA_ID, now, 1001.0)
    good = NumericData(RT_DATA_ID, now + 20000, 998.0)

    alert = lifecycle.alert_from_trigger(trigger, eval_sets(firing, bad), dampening, ctime=now)
    return _walk(alert, status, eval_sets(resolve, good), now)


def availability_alert(status=Status.OPEN, tenant_id=TENANT_ID, now=None):
    """``av-jboss-data`` NOT_UP fired on DOWN, cleared by UP on UP."""
    now = now if now is not None else now_ms()
    trigger = _trigger(AV_TRIGGER_ID, tenant_id)
    firing = _availability(AV_TRIGGER_ID, tenant_id, Mode.FIRING, AvailabilityOperator.NOT_UP)
    resolve = _availability(AV_TRIGGER_ID, tenant_id, Mode.AUTORESOLVE, AvailabilityOperator.UP)
    dampening = Dampening.for_strict_time(AV_TRIGGER_ID, Mode.FIRING, 10000)

    bad = Availability(AV_DATA_ID, now, AvailabilityType.DOWN)
    good = Availability(AV_DATA_ID, now + 20000, AvailabilityType.UP)

    alert = lifecycle.alert_from_trigger(trigger, eval_sets(firing, bad), dampening, ctime=now)
    return _walk(alert, status, eval_sets(resolve, good), now)


def mixed_alert(status=Status.OPEN, tenant_id=TENANT_ID, now=None):
    """Threshold and availability evaluated jointly: 1003 + DOWN, cleared by 997 + UP."""
    now = now if now is not None else now_ms()
    trigger = _trigger(MIX_TRIGGER_ID, tenant_id)
    firing = [
        ThresholdCondition(trigger_id=MIX_TRIGGER_ID, trigger_mode=Mode.FIRING, data_id=RT_DATA_ID,
                           tenant_id=tenant_id, condition_set_size=2, condition_set_index=1,
                           operator=ThresholdOperator.GT, threshold=1000.0),
        AvailabilityCondition(trigger_id=MIX_TRIGGER_ID, trigger_mode=Mode.FIRING, data_id=AV_DATA_ID,
                              tenant_id=tenant_id, condition_set_size=2, condition_set_index=2,
                              operator=AvailabilityOperator.NOT_UP),
    ]
    resolving = [
        ThresholdCondition(trigger_id=MIX_TRIGGER_ID, trigger_mode=Mode.AUTORESOLVE, data_id=RT_DATA_ID,
                           tenant_id=tenant_id, condition_set_size=2, condition_set_index=1,
                           operator=ThresholdOperator.LTE, threshold=1000.0),
        AvailabilityCondition(trigger_id=MIX_TRIGGER_ID, trigger_mode=Mode.AUTORESOLVE, data_id=AV_DATA_ID,
                              tenant_id=tenant_id, condition_set_size=2, condition_set_index=2,
                              operator=AvailabilityOperator.UP),
    ]
    dampening = Dampening.for_strict_time(MIX_TRIGGER_ID, Mode.FIRING, 10000)

    bad = [NumericData(RT_DATA_ID, now, 1003.0), Availability(AV_DATA_ID, now, AvailabilityType.DOWN)]
    good = [NumericData(RT_DATA_ID, now + 20000, 997.0),
            Availability(AV_DATA_ID, now + 20000, AvailabilityType.UP)]

    alert = lifecycle.alert_from_trigger(trigger, eval_sets(firing, bad), dampening, ctime=now)
    return _walk(alert, status, eval_sets(resolving, good), now, ack_first=True)


SCENARIOS = {
    "threshold": threshold_alert,
    "availability": availability_alert,
    "mixed": mixed_alert,
}


def build_scenario(name, status=Status.OPEN, **kwargs):
    try:
        builder = SCENARIOS[name]
    except KeyError:
        raise ValidationError(f"Unknown scenario {name!r}; expected one of {sorted(SCENARIOS)}")
    return builder(status, **kwargs)


def plugin_message(alert, properties=None, action_id="email-to-test"):
    """Wrap an alert in an email PluginMessage using the reference properties."""
    props = default_properties() if properties is None else properties
    return PluginMessage(Action(alert.tenant_id, "email", action_id, alert), props)
