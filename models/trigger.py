"""Triggers and their dampening policies."""
from dataclasses import dataclass

from models.enums import DampeningType, Mode, Severity
from models.exceptions import ValidationError


@dataclass
class Trigger:
    id: str
    name: str = ""
    tenant_id: str = ""
    description: str = ""
    severity: Severity = Severity.MEDIUM
    enabled: bool = True
    auto_resolve: bool = False

    def display_name(self) -> str:
        return self.name or self.id

    def to_dict(self):
        return {
            "tenantId": self.tenant_id,
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "severity": self.severity.value,
            "enabled": self.enabled,
            "autoResolve": self.auto_resolve,
        }


@dataclass(frozen=True)
class Dampening:
    """How raw condition matches turn into a stable firing.

    STRICT fires after N consecutive true evaluations; RELAXED_COUNT after N
    true out of M; RELAXED_TIME after N true within a period; STRICT_TIME when
    evaluations stay true for a period; STRICT_TIMEOUT when they stay true until
    a period elapses. Only the policy is modelled here.
    """
    trigger_id: str
    trigger_mode: Mode
    type: DampeningType
    eval_true_setting: int = 1
    eval_total_setting: int = 1
    eval_time_setting: int = 0
    tenant_id: str = ""

    @property
    def dampening_id(self) -> str:
        return f"{self.trigger_id}-{self.trigger_mode.value}"

    @classmethod
    def for_strict(cls, trigger_id, mode, num_consecutive):
        _positive("num_consecutive", num_consecutive)
        return cls(trigger_id, mode, DampeningType.STRICT,
                   eval_true_setting=num_consecutive, eval_total_setting=num_consecutive)

    @classmethod
    def for_relaxed_count(cls, trigger_id, mode, num_true, num_evals):
        _positive("num_true", num_true)
        _positive("num_evals", num_evals)
        if num_true > num_evals:
            raise ValidationError(f"num_true ({num_true}) cannot exceed num_evals ({num_evals})")
        return cls(trigger_id, mode, DampeningType.RELAXED_COUNT,
                   eval_true_setting=num_true, eval_total_setting=num_evals)

    @classmethod
    def for_relaxed_time(cls, trigger_id, mode, num_true, period_ms):
        _positive("num_true", num_true)
        _positive("period_ms", period_ms)
        return cls(trigger_id, mode, DampeningType.RELAXED_TIME,
                   eval_true_setting=num_true, eval_total_setting=0, eval_time_setting=period_ms)

    @classmethod
    def for_strict_time(cls, trigger_id, mode, period_ms):
        _positive("period_ms", period_ms)
        return cls(trigger_id, mode, DampeningType.STRICT_TIME,
                   eval_true_setting=0, eval_total_setting=0, eval_time_setting=period_ms)

    @classmethod
    def for_strict_timeout(cls, trigger_id, mode, period_ms):
        _positive("period_ms", period_ms)
        return cls(trigger_id, mode, DampeningType.STRICT_TIMEOUT,
                   eval_true_setting=0, eval_total_setting=0, eval_time_setting=period_ms)

    def describe(self) -> str:
        if self.type == DampeningType.STRICT:
            return f"{self.eval_true_setting} consecutive true evaluations"
        if self.type == DampeningType.RELAXED_COUNT:
            return f"{self.eval_true_setting} true out of {self.eval_total_setting} evaluations"
        if self.type == DampeningType.RELAXED_TIME:
            return f"{self.eval_true_setting} true evaluations within {self.eval_time_setting} ms"
        if self.type == DampeningType.STRICT_TIME:
            return f"true for {self.eval_time_setting} ms"
        return f"true until {self.eval_time_setting} ms timeout"

    def to_dict(self):
        return {
            "dampeningId": self.dampening_id,
            "triggerId": self.trigger_id,
            "triggerMode": self.trigger_mode.value,
            "type": self.type.value,
            "evalTrueSetting": self.eval_true_setting,
            "evalTotalSetting": self.eval_total_setting,
            "evalTimeSetting": self.eval_time_setting,
        }


def _positive(name, value):
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
