"""Project exceptions.

Expected outcomes (an underage candidate, a duplicate email) are reported as
values, see ``UserRejected`` and ``SaveOutcome``. Exceptions are reserved for
conditions the pipeline cannot recover from.
"""


class UserGenError(Exception):
    """Base class for usergen errors."""


class StorageError(UserGenError):
    """The storage backend could not complete a whole operation."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
