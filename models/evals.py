"""Condition evaluations and evaluation sets.

A ConditionEval pairs a condition with the data sample it was evaluated
against. Evaluations that satisfied every condition of a trigger at the same
instant form an evaluation set (a frozenset, unique by condition + data). An
alert carries an ordered tuple of such sets.
"""
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Sequence

from models.conditions import Condition
from models.enums import ConditionType, DataType
from models.exceptions import ValidationError
from utils.formatters import now_ms


@dataclass(frozen=True)
class ConditionEval:
    condition_id: str
    condition: Condition = field(compare=False, hash=False)
    data: object = None
    match: bool = field(default=False, compare=False)
    eval_timestamp: int = field(default_factory=now_ms, compare=False)

    type: ClassVar[ConditionType]

    @property
    def value(self):
        return self.data.value

    @property
    def data_timestamp(self) -> int:
        return self.data.timestamp

    def display_value(self) -> str:
        value = self.data.value
        return value.value if hasattr(value, "value") else str(value)

    def describe(self) -> str:
        return f"{self.condition.describe()} (value: {self.display_value()})"

    def to_dict(self):
        return {
            "type": self.type.value,
            "conditionId": self.condition_id,
            "condition": self.condition.to_dict(),
            "data": self.data.to_dict(),
            "match": self.match,
            "evalTimestamp": self.eval_timestamp,
            "dataTimestamp": self.data_timestamp,
        }


@dataclass(frozen=True)
class ThresholdConditionEval(ConditionEval):
    type: ClassVar[ConditionType] = ConditionType.THRESHOLD


@dataclass(frozen=True)
class ThresholdRangeConditionEval(ConditionEval):
    type: ClassVar[ConditionType] = ConditionType.RANGE


@dataclass(frozen=True)
class AvailabilityConditionEval(ConditionEval):
    type: ClassVar[ConditionType] = ConditionType.AVAILABILITY


@dataclass(frozen=True)
class StringConditionEval(ConditionEval):
    type: ClassVar[ConditionType] = ConditionType.STRING


# Condition variant -> (data variant it accepts, evaluation class)
EVAL_VARIANTS = {
    ConditionType.THRESHOLD: (DataType.NUMERIC, ThresholdConditionEval),
    ConditionType.RANGE: (DataType.NUMERIC, ThresholdRangeConditionEval),
    ConditionType.AVAILABILITY: (DataType.AVAILABILITY, AvailabilityConditionEval),
    ConditionType.STRING: (DataType.STRING, StringConditionEval),
}


def build_eval(condition: Condition, data, eval_timestamp=None) -> ConditionEval:
    """Evaluate ``condition`` against ``data``.

    Raises ValidationError when the data variant is not the one the condition
    variant accepts (e.g. a threshold condition paired with availability data).
    """
    if condition is None or data is None:
        raise ValidationError("Both a condition and a data sample are required")

    variant = EVAL_VARIANTS.get(getattr(condition, "type", None))
    if variant is None:
        raise ValidationError(f"Unsupported condition variant: {condition!r}")
    data_type, eval_cls = variant

    data_variant = getattr(data, "type", None)
    if data_variant != data_type:
        found = data_variant.value if data_variant else type(data).__name__
        raise ValidationError(
            f"{condition.type.value} condition {condition.condition_id} requires "
            f"{data_type.value} data, got {found}")
    if condition.data_id and data.data_id != condition.data_id:
        raise ValidationError(
            f"Condition {condition.condition_id} targets {condition.data_id}, "
            f"data is for {data.data_id}")

    return eval_cls(
        condition_id=condition.condition_id,
        condition=condition,
        data=data,
        match=condition.match(data.value),
        eval_timestamp=eval_timestamp if eval_timestamp is not None else now_ms(),
    )


def eval_set(pairs: Iterable) -> frozenset:
    """Build one evaluation set from (condition, data) pairs."""
    evals = frozenset(build_eval(condition, data) for condition, data in pairs)
    if not evals:
        raise ValidationError("An evaluation set needs at least one (condition, data) pair")
    return evals


def eval_sets(conditions: Sequence, data: Sequence) -> tuple:
    """Zip parallel condition/data sequences into a single-set evaluation sequence."""
    if isinstance(conditions, Condition):
        conditions = [conditions]
    if not isinstance(data, (list, tuple)):
        data = [data]
    if len(conditions) != len(data):
        raise ValidationError(
            f"Got {len(conditions)} conditions but {len(data)} data samples")
    return (eval_set(zip(conditions, data)),)


def check_eval_sets(sets, what="evaluation") -> tuple:
    """Validate and freeze an evaluation-set sequence: non-empty, no empty sets."""
    if sets is None:
        raise ValidationError(f"{what.capitalize()} sets are required")
    frozen = tuple(frozenset(s) for s in sets)
    if not frozen:
        raise ValidationError(f"{what.capitalize()} set sequence must not be empty")
    for i, s in enumerate(frozen):
        if not s:
            raise ValidationError(f"{what.capitalize()} set #{i + 1} is empty")
        for ev in s:
            if not isinstance(ev, ConditionEval):
                raise ValidationError(f"{what.capitalize()} set #{i + 1} holds a non-evaluation: {ev!r}")
    return frozen

