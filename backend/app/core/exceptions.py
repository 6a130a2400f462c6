"""Application error taxonomy, mapped to HTTP responses in app.main."""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    """Request parameters that cannot be sanitized, e.g. conflicting filters."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request parameters"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class StoreUnavailable(AppError):
    """The record store could not be reached or rejected the query."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Record store unavailable"
