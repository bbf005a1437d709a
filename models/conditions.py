"""Condition variants: predicates over a named data stream.

Every variant carries the same identity fields (owning trigger, mode, position
in the trigger's condition set, target data id) and adds its own comparison
parameters. Conditions are configuration, so they stay mutable; the REST layer
replaces them wholesale on update.
"""
import re
from dataclasses import dataclass
from typing import ClassVar, Optional

from models.enums import (
    AvailabilityOperator,
    AvailabilityType,
    ConditionType,
    Mode,
    RangeOperator,
    StringOperator,
    ThresholdOperator,
)
from models.exceptions import ValidationError


@dataclass
class Condition:
    trigger_id: str = ""
    trigger_mode: Mode = Mode.FIRING
    data_id: str = ""
    tenant_id: str = ""
    condition_set_size: int = 1
    condition_set_index: int = 1
    condition_id: Optional[str] = None

    type: ClassVar[ConditionType]

    def __post_init__(self):
        if self.condition_id is None and self.trigger_id:
            self.condition_id = self.derive_id()

    def derive_id(self):
        return (f"{self.tenant_id}-{self.trigger_id}-{self.trigger_mode.value}-"
                f"{self.condition_set_size}-{self.condition_set_index}")

    def match(self, value) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    def to_dict(self):
        return {
            "type": self.type.value,
            "conditionId": self.condition_id,
            "tenantId": self.tenant_id,
            "triggerId": self.trigger_id,
            "triggerMode": self.trigger_mode.value,
            "conditionSetSize": self.condition_set_size,
            "conditionSetIndex": self.condition_set_index,
            "dataId": self.data_id,
        }


@dataclass
class ThresholdCondition(Condition):
    operator: ThresholdOperator = ThresholdOperator.GT
    threshold: float = 0.0

    type: ClassVar[ConditionType] = ConditionType.THRESHOLD

    def match(self, value) -> bool:
        value = float(value)
        if self.operator == ThresholdOperator.LT:
            return value < self.threshold
        if self.operator == ThresholdOperator.GT:
            return value > self.threshold
        if self.operator == ThresholdOperator.LTE:
            return value <= self.threshold
        return value >= self.threshold

    def describe(self) -> str:
        symbol = {"LT": "<", "GT": ">", "LTE": "<=", "GTE": ">="}[self.operator.value]
        return f"{self.data_id} {symbol} {self.threshold}"

    def to_dict(self):
        d = super().to_dict()
        d.update({"operator": self.operator.value, "threshold": self.threshold})
        return d


@dataclass
class ThresholdRangeCondition(Condition):
    operator_low: RangeOperator = RangeOperator.INCLUSIVE
    operator_high: RangeOperator = RangeOperator.INCLUSIVE
    threshold_low: float = 0.0
    threshold_high: float = 0.0
    in_range: bool = True

    type: ClassVar[ConditionType] = ConditionType.RANGE

    def __post_init__(self):
        super().__post_init__()
        if self.threshold_low > self.threshold_high:
            raise ValidationError(
                f"Range low {self.threshold_low} is above range high {self.threshold_high}")

    def match(self, value) -> bool:
        value = float(value)
        if self.operator_low == RangeOperator.INCLUSIVE:
            above_low = value >= self.threshold_low
        else:
            above_low = value > self.threshold_low
        if self.operator_high == RangeOperator.INCLUSIVE:
            below_high = value <= self.threshold_high
        else:
            below_high = value < self.threshold_high
        inside = above_low and below_high
        return inside if self.in_range else not inside

    def describe(self) -> str:
        lo = "[" if self.operator_low == RangeOperator.INCLUSIVE else "("
        hi = "]" if self.operator_high == RangeOperator.INCLUSIVE else ")"
        where = "in" if self.in_range else "not in"
        return f"{self.data_id} {where} {lo}{self.threshold_low}, {self.threshold_high}{hi}"

    def to_dict(self):
        d = super().to_dict()
        d.update({
            "operatorLow": self.operator_low.value,
            "operatorHigh": self.operator_high.value,
            "thresholdLow": self.threshold_low,
            "thresholdHigh": self.threshold_high,
            "inRange": self.in_range,
        })
        return d


@dataclass
class AvailabilityCondition(Condition):
    operator: AvailabilityOperator = AvailabilityOperator.NOT_UP

    type: ClassVar[ConditionType] = ConditionType.AVAILABILITY

    def match(self, value) -> bool:
        value = AvailabilityType(value)
        if self.operator == AvailabilityOperator.DOWN:
            return value == AvailabilityType.DOWN
        if self.operator == AvailabilityOperator.UP:
            return value == AvailabilityType.UP
        return value != AvailabilityType.UP

    def describe(self) -> str:
        return f"{self.data_id} is {self.operator.value}"

    def to_dict(self):
        d = super().to_dict()
        d["operator"] = self.operator.value
        return d


@dataclass
class StringCondition(Condition):
    operator: StringOperator = StringOperator.EQUAL
    pattern: str = ""
    ignore_case: bool = False

    type: ClassVar[ConditionType] = ConditionType.STRING

    def __post_init__(self):
        super().__post_init__()
        if self.operator == StringOperator.MATCH:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValidationError(f"Invalid MATCH pattern {self.pattern!r}: {e}") from e

    def match(self, value) -> bool:
        value = "" if value is None else str(value)
        pattern = self.pattern
        if self.operator == StringOperator.MATCH:
            flags = re.IGNORECASE if self.ignore_case else 0
            return re.fullmatch(pattern, value, flags) is not None
        if self.ignore_case:
            value, pattern = value.upper(), pattern.upper()
        if self.operator == StringOperator.EQUAL:
            return value == pattern
        if self.operator == StringOperator.NOT_EQUAL:
            return value != pattern
        if self.operator == StringOperator.STARTS_WITH:
            return value.startswith(pattern)
        if self.operator == StringOperator.ENDS_WITH:
            return value.endswith(pattern)
        return pattern in value

    def describe(self) -> str:
        case = " (ignore case)" if self.ignore_case else ""
        return f"{self.data_id} {self.operator.value} '{self.pattern}'{case}"

    def to_dict(self):
        d = super().to_dict()
        d.update({"operator": self.operator.value, "pattern": self.pattern,
                  "ignoreCase": self.ignore_case})
        return d


CONDITION_CLASSES = {
    ConditionType.THRESHOLD: ThresholdCondition,
    ConditionType.RANGE: ThresholdRangeCondition,
    ConditionType.AVAILABILITY: AvailabilityCondition,
    ConditionType.STRING: StringCondition,
}

# REST path segment -> variant
CONDITION_KINDS = {
    "threshold": ConditionType.THRESHOLD,
    "range": ConditionType.RANGE,
    "availability": ConditionType.AVAILABILITY,
    "string": ConditionType.STRING,
}


def _common_fields(payload):
    return {
        "condition_id": payload.get("conditionId"),
        "tenant_id": payload.get("tenantId") or "",
        "trigger_id": payload.get("triggerId") or "",
        "trigger_mode": Mode(payload.get("triggerMode", Mode.FIRING.value)),
        "condition_set_size": int(payload.get("conditionSetSize", 1)),
        "condition_set_index": int(payload.get("conditionSetIndex", 1)),
        "data_id": payload.get("dataId") or "",
    }


def condition_from_dict(payload, expected_type: Optional[ConditionType] = None):
    """Rebuild a condition from its JSON wire form.

    When ``expected_type`` is given the payload may omit its ``type`` tag, but a
    tag naming a different variant is rejected.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Condition payload must be a JSON object")

    try:
        tag = payload.get("type")
        cond_type = ConditionType(tag) if tag else expected_type
        if cond_type is None:
            raise ValidationError("Condition payload has no type")
        if expected_type is not None and cond_type != expected_type:
            raise ValidationError(
                f"Expected a {expected_type.value} condition, got {cond_type.value}")

        fields = _common_fields(payload)
        if cond_type == ConditionType.THRESHOLD:
            return ThresholdCondition(
                operator=ThresholdOperator(payload["operator"]),
                threshold=float(payload["threshold"]),
                **fields,
            )
        if cond_type == ConditionType.RANGE:
            return ThresholdRangeCondition(
                operator_low=RangeOperator(payload.get("operatorLow", "INCLUSIVE")),
                operator_high=RangeOperator(payload.get("operatorHigh", "INCLUSIVE")),
                threshold_low=float(payload["thresholdLow"]),
                threshold_high=float(payload["thresholdHigh"]),
                in_range=bool(payload.get("inRange", True)),
                **fields,
            )
        if cond_type == ConditionType.AVAILABILITY:
            return AvailabilityCondition(
                operator=AvailabilityOperator(payload["operator"]),
                **fields,
            )
        return StringCondition(
            operator=StringOperator(payload["operator"]),
            pattern=str(payload.get("pattern", "")),
            ignore_case=bool(payload.get("ignoreCase", False)),
            **fields,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid condition payload: {e}") from e
