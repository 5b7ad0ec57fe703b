"""Domain layer errors.

Malformed references and unauthorized claims are expected input on an open
protocol and never surface as exceptions. These errors are reserved for
broken preconditions and for lookups requested by a caller.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidPointerError(ValidationError):
    """Raised when a pointer is built from a malformed reference."""

    def __init__(self, value: str, reason: str):
        self.value = value
        super().__init__(f"Invalid pointer {value!r}: {reason}")


class NotTrackableError(ValidationError):
    """Raised when status is requested for an event that cannot carry one."""

    def __init__(self, event_id: str, kind: int):
        super().__init__(f"Event {event_id} of kind {kind} has no status")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
