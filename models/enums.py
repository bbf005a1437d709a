"""Enums for trigger modes, alert status, severities and condition operators."""
from enum import Enum


class Mode(str, Enum):
    FIRING = "FIRING"
    AUTORESOLVE = "AUTORESOLVE"


class Status(str, Enum):
    OPEN = "OPEN"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    RESOLVED = "RESOLVED"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ConditionType(str, Enum):
    THRESHOLD = "THRESHOLD"
    RANGE = "RANGE"
    AVAILABILITY = "AVAILABILITY"
    STRING = "STRING"


class DataType(str, Enum):
    NUMERIC = "NUMERIC"
    AVAILABILITY = "AVAILABILITY"
    STRING = "STRING"


class ThresholdOperator(str, Enum):
    LT = "LT"
    GT = "GT"
    LTE = "LTE"
    GTE = "GTE"


class RangeOperator(str, Enum):
    INCLUSIVE = "INCLUSIVE"
    EXCLUSIVE = "EXCLUSIVE"


class AvailabilityOperator(str, Enum):
    DOWN = "DOWN"
    NOT_UP = "NOT_UP"
    UP = "UP"


class AvailabilityType(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    UNAVAILABLE = "UNAVAILABLE"


class StringOperator(str, Enum):
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    CONTAINS = "CONTAINS"
    MATCH = "MATCH"


class DampeningType(str, Enum):
    STRICT = "STRICT"
    RELAXED_COUNT = "RELAXED_COUNT"
    RELAXED_TIME = "RELAXED_TIME"
    STRICT_TIME = "STRICT_TIME"
    STRICT_TIMEOUT = "STRICT_TIMEOUT"
