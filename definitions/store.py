"""Definitions store contract and its in-memory implementation."""
import copy
import logging
import threading
from typing import Optional, Protocol, runtime_checkable

from models.conditions import Condition
from models.exceptions import Conflict, NotFound, ValidationError

logger = logging.getLogger("alertsvc.definitions.store")


@runtime_checkable
class DefinitionsStore(Protocol):
    """Conditions keyed by condition id. A ``None`` lookup means absent."""

    def get_condition(self, condition_id) -> Optional[Condition]: ...

    def get_conditions(self) -> list: ...

    def add_condition(self, condition) -> None: ...

    def update_condition(self, condition) -> None: ...

    def remove_condition(self, condition_id) -> None: ...

    def close(self) -> None: ...

class InMemoryDefinitions:
    """Dict-backed store. Callers get copies, so stored definitions only change through the store."""

    def __init__(self, conditions=None):
        self._conditions = {}
        self._lock = threading.RLock()
        for c in conditions or []:
            self.add_condition(c)

    def get_condition(self, condition_id):
        with self._lock:
            found = self._conditions.get(condition_id)
            return copy.deepcopy(found) if found is not None else None

    def get_conditions(self):
        with self._lock:
            return [copy.deepcopy(c) for c in self._conditions.values()]

    def add_condition(self, condition):
        if condition is None or not condition.condition_id:
            raise ValidationError("Condition has no condition id")
        with self._lock:
            if condition.condition_id in self._conditions:
                raise Conflict(f"Condition {condition.condition_id} already exists")
            self._conditions[condition.condition_id] = copy.deepcopy(condition)
        logger.debug(f"Added condition {condition.condition_id}")

    def update_condition(self, condition):
        if condition is None or not condition.condition_id:
            raise ValidationError("Condition has no condition id")
        with self._lock:
            if condition.condition_id not in self._conditions:
                raise NotFound(f"Condition {condition.condition_id} not found")
            self._conditions[condition.condition_id] = copy.deepcopy(condition)
        logger.debug(f"Updated condition {condition.condition_id}")

    def remove_condition(self, condition_id):
        with self._lock:
            if self._conditions.pop(condition_id, None) is None:
                raise NotFound(f"Condition {condition_id} not found")
        logger.debug(f"Removed condition {condition_id}")

    def close(self):
        with self._lock:
            self._conditions.clear()
