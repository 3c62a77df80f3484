"""
ClimaTask Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-safe message and an optional context dict
       (logged, never returned). Exception handlers registered in main.py map
       each class to an HTTP status code and a JSON error body.
Who:   Raised by repositories, services and route dependencies.

Exception Hierarchy:
    ClimaTaskError (base)
    ├── ValidationError              → 400 Bad Request
    │   ├── ConflictError            → 400 (email already registered)
    │   └── InvalidCredentialsError  → 400 (login password mismatch)
    ├── UnauthorizedError            → 401 Unauthorized (bad climate api key)
    ├── NotFoundError                → 404 Not Found
    │   └── RecordNotFoundError      → 404 (update/delete of a missing row)
    ├── WeatherServiceError          → 500 Internal Server Error
    └── DatabaseError                → 500 Internal Server Error
        └── DuplicateRecordError     → 500 (400 as ConflictError for user email)
"""

from typing import Any, Dict, Optional


class ClimaTaskError(Exception):
    """
    Base exception for all ClimaTask application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    # Machine-readable `error` field of the JSON error body
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ClimaTaskError):
    """
    Raised when client input breaks a business rule.

    HTTP: 400 Bad Request. Schema-level problems (missing fields, wrong types)
    are left to FastAPI, which answers 422.
    """

    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(ValidationError):
    """Raised when a unique value (user email) is already taken."""

    error_code = "conflict"

    def __init__(self, message: str = "User already exists", field: Optional[str] = "email"):
        super().__init__(message=message, field=field)


class InvalidCredentialsError(ValidationError):
    """Raised on login when the password does not match the stored hash."""

    error_code = "invalid_credentials"

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message=message, field="password")


class UnauthorizedError(ClimaTaskError):
    """
    Raised when the static /climate api key does not match.

    HTTP: 401 Unauthorized
    """

    error_code = "unauthorized"

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message=message)


class NotFoundError(ClimaTaskError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception before doing any further work.
    """

    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        if resource_id is not None:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class RecordNotFoundError(NotFoundError):
    """
    Raised by repositories when update/delete targets an id with no row.

    Distinct from a plain NotFoundError so callers can tell "the write found
    nothing to touch" apart from a failed read.
    """


class WeatherServiceError(ClimaTaskError):
    """
    Raised when the forecast upstream cannot be reached or its payload cannot
    be reshaped.

    HTTP: 500 Internal Server Error (generic message; details logged)
    """

    error_code = "weather_service_error"

    def __init__(
        self,
        message: str = "Could not retrieve weather data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ClimaTaskError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    Covers integrity violations (e.g. a location pointing at a missing user),
    pool timeouts and lost connections. The client only ever sees the
    generic message; constraint names and SQL stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DuplicateRecordError(DatabaseError):
    """
    Raised by repositories when a write hits a UNIQUE constraint.

    UserService turns it into ConflictError for the email column; anywhere
    else it is answered like any other DatabaseError.
    """
