"""
Domain errors raised by SchoolCMS services.

Each error carries the HTTP status the API maps it to, so routers can raise
them directly and a single set of exception handlers renders the response.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """One violated field in a payload."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class SchoolCMSError(Exception):
    """Base error for all SchoolCMS exceptions."""

    status_code = 500
    public_message = "An unexpected server error occurred."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(SchoolCMSError):
    """Raised when a payload or route parameter fails its schema."""

    status_code = 400
    public_message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None):
        super().__init__(message)
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]


class NotFoundError(SchoolCMSError):
    """Raised when a referenced record does not exist."""

    status_code = 404
    public_message = "Resource not found."


class PersistenceError(SchoolCMSError):
    """Raised when the database rejects or cannot serve an operation."""

    status_code = 500
    public_message = "A database error occurred."


class DataCorruptionError(SchoolCMSError):
    """Raised when stored image data does not match its own schema."""

    status_code = 500
    public_message = "Internal error: Image data structure is corrupted."

    def __init__(self, resource: str, record_id: int, detail: str = ""):
        super().__init__(f"Corrupted images for {resource} {record_id}: {detail}".rstrip(": "))
        self.resource = resource
        self.record_id = record_id
        self.detail = detail


class ExternalServiceError(SchoolCMSError):
    """Raised by the asset store client when ImageKit fails."""

    status_code = 500
    public_message = "The image service is unavailable."


class AuthenticationError(SchoolCMSError):
    """Raised when a request lacks a valid admin session."""

    status_code = 401
    public_message = "Not authorized"
