# gateway/exceptions.py
# Application errors carrying the HTTP status and code they are reported with

class AppError(Exception):
    """Base application error with structured response."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}


class DatabaseError(AppError):
    """Store unreachable or a statement failed."""
    def __init__(self, message: str = "Database operation failed", details: dict = None):
        super().__init__(message, "DATABASE_ERROR", 503, details)


class UnauthorizedError(AppError):
    """No authenticated user on the request."""
    def __init__(self, message: str = "Authentication required", details: dict = None):
        super().__init__(message, "UNAUTHORIZED", 401, details)
