"""
Domain error taxonomy.

Services raise these; the handlers registered in app.main turn them into
JSON responses of the form {"detail": "<message>"} with the matching status.
"""

from typing import Optional


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(AppError):
    """Authenticated, but not allowed to touch this resource."""
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Business-rule collision (duplicate pending request, double booking, terminal state)."""
    status_code = 409
    default_message = "Conflict"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"
