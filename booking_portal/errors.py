# booking_portal/errors.py
"""
Error taxonomy for the scheduling core.

- ValidationError:   malformed input (bad id, bad time, slot not offered).
- NotFoundError:     a referenced request/meeting does not exist.
- ConflictError:     slot was taken between selection and confirmation.
- InvalidStateError: operating on a request that already left PENDING.
- PersistenceError:  the store failed; never retried here.
"""


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    pass


class NotFoundError(ValidationError):
    pass


class ConflictError(SchedulingError):
    pass


class InvalidStateError(SchedulingError):
    pass


class PersistenceError(SchedulingError):
    pass
