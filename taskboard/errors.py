"""Domain errors raised by the storage layer and mapped to HTTP responses."""


class TaskboardError(Exception):
    """Base class for all Taskboard errors."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(TaskboardError):
    """A required field is missing or has the wrong type."""

    status_code = 400
    public_message = "Invalid request body"


class NotFoundError(TaskboardError):
    """The update/delete target does not exist."""

    status_code = 404
    public_message = "Not found"


class ConflictError(TaskboardError):
    """A uniqueness constraint was violated.

    Reported to clients as a generic 500.
    """


class InternalError(TaskboardError):
    """Storage or serialization failure."""
