"""
Service error hierarchy

Every error carries the HTTP status it maps to; `Logger.io` logs subclasses of
CustomBaseError without a traceback since they are expected outcomes.
Check-in paths never raise these for bad tickets: they answer with an
`invalid` scan result instead.
"""


class CustomBaseError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    """A domain rule was violated (e.g. checking in a ticket twice)"""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidInputError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class CapacityExceededError(ConflictError):
    """The booking would push tickets_sold past capacity; nothing was written"""

    def __init__(self, *, event_id: int, requested: int, remaining: int) -> None:
        super().__init__(
            f'Not enough tickets available (requested {requested}, remaining {remaining})'
        )
        self.event_id = event_id
        self.requested = requested
        self.remaining = remaining
