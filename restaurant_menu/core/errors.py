"""
Application Errors

Typed error hierarchy shared by route handlers and services.
Every error carries a machine-readable code and the HTTP status it maps to,
so handlers can raise and the exception handlers in main.py convert.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from enum import Enum
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error payloads."""
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    FOREIGN_KEY_VIOLATION = "FOREIGN_KEY_VIOLATION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """
    Base application error.

    Attributes:
        code: Machine-readable error code
        message: Human-readable message safe to return to clients
        status_code: HTTP status for the response
        context: Extra diagnostic data (logged, not returned)
    """

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code.value} ({self.status_code}): {self.message}>"


class DuplicateEntryError(AppError):
    code = ErrorCode.DUPLICATE_ENTRY
    status_code = 409
    default_message = "A record with this information already exists"


class ForeignKeyViolationError(AppError):
    code = ErrorCode.FOREIGN_KEY_VIOLATION
    status_code = 400
    default_message = "Referenced record does not exist"


class ValidationFailedError(AppError):
    code = ErrorCode.VALIDATION_ERROR
    status_code = 400
    default_message = "Validation failed"


class NotFoundError(AppError):
    code = ErrorCode.NOT_FOUND
    status_code = 404
    default_message = "Resource not found"

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} with id {identifier} not found"
        super().__init__(message, {"resource": resource, "id": identifier})


class AuthenticationError(AppError):
    code = ErrorCode.AUTHENTICATION_ERROR
    status_code = 401
    default_message = "Authentication failed"


class AuthorizationError(AppError):
    code = ErrorCode.AUTHORIZATION_ERROR
    status_code = 403
    default_message = "Authorization failed"


class DatabaseError(AppError):
    code = ErrorCode.DATABASE_ERROR
    status_code = 500
    default_message = "Database operation failed"


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify_database_error(exc: Exception, operation: str) -> AppError:
    """
    Map a database exception onto the matching application error.

    SQLite and PostgreSQL word constraint failures differently, so the
    driver message is matched case-insensitively on both phrasings.

    Args:
        exc: Exception raised by SQLAlchemy or the driver
        operation: Short description of what was attempted

    Returns:
        AppError: The classified error (never raised here)
    """
    if isinstance(exc, AppError):
        return exc

    text = str(getattr(exc, "orig", None) or exc).lower()
    context = {"operation": operation}

    if isinstance(exc, IntegrityError):
        if "unique" in text or "duplicate key" in text:
            error: AppError = DuplicateEntryError(context=context)
        elif "foreign key" in text:
            error = ForeignKeyViolationError(context=context)
        elif "not null" in text:
            error = ValidationFailedError("A required field is missing", context)
        else:
            error = DatabaseError(context=context)
    elif isinstance(exc, SQLAlchemyError):
        error = DatabaseError(context=context)
    else:
        error = AppError(context=context)

    logger.error(f"Database operation failed: {operation} ({error.code.value}): {exc}")
    return error


def to_error_response(exc: Exception, debug: bool = False) -> tuple[int, dict[str, Any]]:
    """
    Convert any exception into an HTTP status and error payload.

    Args:
        exc: The exception to convert
        debug: Include the raw exception text for unknown errors

    Returns:
        Tuple of (status_code, payload)
    """
    if isinstance(exc, AppError):
        return exc.status_code, {
            "success": False,
            "error": exc.code.value,
            "detail": exc.message,
        }

    return 500, {
        "success": False,
        "error": ErrorCode.INTERNAL_ERROR.value,
        "detail": str(exc) if debug else AppError.default_message,
    }
