"""Immutable data samples evaluated by conditions."""
from dataclasses import dataclass, field
from typing import ClassVar

from models.enums import AvailabilityType, DataType
from models.exceptions import ValidationError
from utils.formatters import now_ms


@dataclass(frozen=True)
class NumericData:
    data_id: str
    timestamp: int = field(default_factory=now_ms)
    value: float = 0.0

    type: ClassVar[DataType] = DataType.NUMERIC

    def to_dict(self):
        return {"type": self.type.value, "id": self.data_id,
                "timestamp": self.timestamp, "value": self.value}


@dataclass(frozen=True)
class Availability:
    data_id: str
    timestamp: int = field(default_factory=now_ms)
    value: AvailabilityType = AvailabilityType.UP

    type: ClassVar[DataType] = DataType.AVAILABILITY

    def to_dict(self):
        return {"type": self.type.value, "id": self.data_id,
                "timestamp": self.timestamp, "value": self.value.value}


@dataclass(frozen=True)
class StringData:
    data_id: str
    timestamp: int = field(default_factory=now_ms)
    value: str = ""

    type: ClassVar[DataType] = DataType.STRING

    def to_dict(self):
        return {"type": self.type.value, "id": self.data_id,
                "timestamp": self.timestamp, "value": self.value}


DATA_CLASSES = {
    DataType.NUMERIC: NumericData,
    DataType.AVAILABILITY: Availability,
    DataType.STRING: StringData,
}


def data_from_dict(payload: dict):
    """Rebuild a data sample from its JSON form."""
    try:
        data_type = DataType(payload["type"])
        data_id = payload["id"]
        timestamp = int(payload.get("timestamp") or now_ms())
        raw = payload["value"]
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid data payload: {e}") from e

    if data_type == DataType.NUMERIC:
        try:
            return NumericData(data_id, timestamp, float(raw))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid numeric value for {data_id}: {raw!r}") from e
    if data_type == DataType.AVAILABILITY:
        try:
            return Availability(data_id, timestamp, AvailabilityType(raw))
        except ValueError as e:
            raise ValidationError(f"Invalid availability value for {data_id}: {raw!r}") from e
    return StringData(data_id, timestamp, str(raw))
