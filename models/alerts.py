"""Dataclasses for alerts and the notification actions built from them."""
import threading
from dataclasses import dataclass, field
from typing import Optional

from models.enums import Severity, Status
from models.trigger import Dampening, Trigger
from utils.formatters import now_ms


@dataclass
class Alert:
    tenant_id: str
    trigger_id: str
    severity: Severity
    eval_sets: tuple
    ctime: int = field(default_factory=now_ms)
    status: Status = Status.OPEN

    ack_by: Optional[str] = None
    ack_time: Optional[int] = None
    ack_notes: Optional[str] = None

    resolved_by: Optional[str] = None
    resolved_time: Optional[int] = None
    resolved_notes: Optional[str] = None
    resolved_eval_sets: Optional[tuple] = None

    trigger: Optional[Trigger] = None
    dampening: Optional[Dampening] = None

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False,
                                  repr=False, compare=False)

    @property
    def alert_id(self) -> str:
        return f"{self.trigger_id}-{self.ctime}"

    @property
    def trigger_name(self) -> str:
        return self.trigger.display_name() if self.trigger else self.trigger_id

    @property
    def lock(self):
        return self._lock

    def to_dict(self):
        def sets(seq):
            if seq is None:
                return None
            return [sorted((ev.to_dict() for ev in s), key=lambda d: d["conditionId"] or "")
                    for s in seq]

        return {
            "alertId": self.alert_id,
            "tenantId": self.tenant_id,
            "triggerId": self.trigger_id,
            "severity": self.severity.value,
            "status": self.status.value,
            "ctime": self.ctime,
            "evalSets": sets(self.eval_sets),
            "ackBy": self.ack_by,
            "ackTime": self.ack_time,
            "ackNotes": self.ack_notes,
            "resolvedBy": self.resolved_by,
            "resolvedTime": self.resolved_time,
            "resolvedNotes": self.resolved_notes,
            "resolvedEvalSets": sets(self.resolved_eval_sets),
            "trigger": self.trigger.to_dict() if self.trigger else None,
            "dampening": self.dampening.to_dict() if self.dampening else None,
        }


@dataclass
class Action:
    tenant_id: str
    action_plugin: str
    action_id: str
    alert: Alert
    ctime: int = field(default_factory=now_ms)

    def to_dict(self):
        return {
            "tenantId": self.tenant_id,
            "actionPlugin": self.action_plugin,
            "actionId": self.action_id,
            "ctime": self.ctime,
            "alertId": self.alert.alert_id,
            "status": self.alert.status.value,
        }


@dataclass
class PluginMessage:
    """What a notification plugin receives: the action plus its string properties."""
    action: Action
    properties: dict = field(default_factory=dict)
