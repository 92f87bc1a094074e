"""Error taxonomy for submission operations."""

from fastapi import status


class SubmissionError(Exception):
    """Base error rendered as a JSON error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(SubmissionError):
    """No valid session, or the admin credential is missing or wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ValidationError(SubmissionError):
    """Required input is missing or outside the accepted values."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class NotFound(SubmissionError):
    """Resource is absent or not visible to the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransition(SubmissionError):
    """Requested status change is not allowed from the current status."""

    status_code = status.HTTP_409_CONFLICT


class PersistenceError(SubmissionError):
    """Record store or object store operation failed."""
