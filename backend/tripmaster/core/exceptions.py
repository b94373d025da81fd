"""
Application error taxonomy.

Services raise these; the handlers registered in ``main.py`` render them
as ``{"error": message}`` with the matching status code.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthorizedError(AppError):
    """Missing token or wrong credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    """Token present but not trusted."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid access token"


class NotFoundError(AppError):
    """Resource absent, or owned by someone else."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Unique constraint collision."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class UnavailableError(AppError):
    """Storage unreachable after retries."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database unavailable"
