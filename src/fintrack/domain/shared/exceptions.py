"""Shared exceptions and error codes.

This module defines the base exception hierarchy for the whole client.
Every error raised by the client inherits from FintrackError so callers
can render a single non-fatal inline message for any failed operation.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Stable error codes for programmatic handling."""

    # Local validation (never reaches the network)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_RANGE = "INVALID_RANGE"
    CATEGORY_CYCLE = "CATEGORY_CYCLE"

    # Remote errors
    NETWORK_ERROR = "NETWORK_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_RESPONSE = "INVALID_RESPONSE"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


FieldErrors = dict[str, list[str]]


class FintrackError(Exception):  # NOQA: N818
    """Base exception for all client errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged, not shown to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(FintrackError):
    """Raised when input is rejected locally, before any network call."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[FieldErrors] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.field_errors: FieldErrors = field_errors or {}

    def first_error(self, field: str) -> Optional[str]:
        messages = self.field_errors.get(field)
        return messages[0] if messages else None


class InvalidRangeError(ValidationError):
    """Raised when a date range starts after it ends."""

    def __init__(self, start: Any, end: Any) -> None:
        super().__init__(
            message=f"Start date {start} is after end date {end}",
            field_errors={"end_date": ["End date must be on or after the start date"]},
            code=ErrorCode.INVALID_RANGE,
            details={"start": str(start), "end": str(end)},
        )


class ApiError(FintrackError):
    """Base class for failures reported by the transport or the server.

    Attributes
    ----------
    status_code
        HTTP status of the response, None when no response arrived
    field_errors
        Structured per-field messages from the server, if any
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SERVER_ERROR,
        status_code: Optional[int] = None,
        field_errors: Optional[FieldErrors] = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.status_code = status_code
        self.field_errors: FieldErrors = field_errors or {}


class NetworkError(ApiError):
    """Raised when the request never produced a response."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code=ErrorCode.NETWORK_ERROR, details=details)


class ServerError(ApiError):
    """Raised when the server answers with an error status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        field_errors: Optional[FieldErrors] = None,
        code: ErrorCode = ErrorCode.SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status_code,
            field_errors=field_errors,
            details=details,
        )


class NotFoundError(ServerError):
    """Raised when an entity id has no server-side match."""

    def __init__(self, message: str, resource: Optional[str] = None) -> None:
        super().__init__(
            message,
            status_code=404,
            code=ErrorCode.ENTITY_NOT_FOUND,
            details={"resource": resource},
        )


class UnauthorizedError(ServerError):
    """Raised when the server rejects the bearer credential."""

    def __init__(self, message: str = "Session expired, please log in again") -> None:
        super().__init__(message, status_code=401, code=ErrorCode.UNAUTHORIZED)


class InvalidResponseError(ServerError):
    """Raised when a successful response carries a body the client cannot parse."""

    def __init__(
        self,
        message: str = "The server sent a response that could not be read",
        status_code: int = 200,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            code=ErrorCode.INVALID_RESPONSE,
            details=details,
        )
