"""Shared domain components.

This module exports exceptions, time helpers and calendar bucketing
used across the client.
"""

from fintrack.domain.shared.exceptions import (
    ApiError,
    ErrorCode,
    FieldErrors,
    FintrackError,
    InvalidRangeError,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from fintrack.domain.shared.periods import Interval, ensure_valid_range
from fintrack.domain.shared.time import today_utc

__all__ = [
    # Error codes
    "ErrorCode",
    "FieldErrors",
    # Base exception
    "FintrackError",
    # Local errors
    "ValidationError",
    "InvalidRangeError",
    # Remote errors
    "ApiError",
    "NetworkError",
    "ServerError",
    "InvalidResponseError",
    "NotFoundError",
    "UnauthorizedError",
    # Utilities
    "Interval",
    "ensure_valid_range",
    "today_utc",
]
