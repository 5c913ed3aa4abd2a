"""
Error taxonomy for the data-access layer.

Services raise these; the JSON API maps them to status codes through
exception handlers in main.py, and the HTML views render `message` inline.
"""


class ServiceError(Exception):
    """Base class for every failure scoped to a single user action."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ServiceError):
    """A required field is missing or malformed. Raised before any backend call."""

    status_code = 422


class NotFoundError(ServiceError):
    """No row matched the requested id."""

    status_code = 404


class BackendError(ServiceError):
    """The persistence backend rejected the call or could not be reached."""

    status_code = 502
