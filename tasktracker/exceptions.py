class TaskTrackerError(Exception):
    """Base class for errors raised by the repositories and the transport."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskTrackerError):
    """Bad or missing input. The caller can fix the input and retry."""

    status_code = 400


class IntegrityError(ValidationError):
    """A referenced user does not exist. Reported to callers as a validation failure."""


class NotFoundError(TaskTrackerError):
    status_code = 404


class ConnectivityError(TaskTrackerError):
    """Storage or transport is unreachable. The operation is aborted without retry."""

    status_code = 503
