"""Data models."""
from models.enums import (
    Mode, Status, Severity, ConditionType, DataType, ThresholdOperator, RangeOperator,
    AvailabilityOperator, AvailabilityType, StringOperator, DampeningType,
)
from models.exceptions import AlertsError, ValidationError, InvalidTransition, Conflict, NotFound
from models.data import NumericData, Availability, StringData
from models.conditions import (
    Condition, ThresholdCondition, ThresholdRangeCondition, AvailabilityCondition, StringCondition,
    condition_from_dict,
)
from models.evals import ConditionEval, build_eval, eval_set, eval_sets
from models.trigger import Trigger, Dampening
from models.alerts import Alert, Action, PluginMessage
