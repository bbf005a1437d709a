"""Error taxonomy raised by the lifecycle model and the definitions store."""


class AlertsError(Exception):
    """Base class for all recoverable alerting errors."""


class ValidationError(AlertsError):
    """Malformed input: empty evaluation sets, mismatched condition/data pairing, bad payloads."""


class InvalidTransition(AlertsError):
    """A lifecycle transition was attempted from a state that does not allow it."""


class Conflict(AlertsError):
    """An identifier already exists."""


class NotFound(AlertsError):
    """An operation referenced an unknown identifier."""
