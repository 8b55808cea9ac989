"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing fields, etc.)."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """A required secret or setting is missing."""

    UNAUTHORIZED = "UNAUTHORIZED"
    """The webhook signature did not validate."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level detail for validation failures."""

    field: str | None = None
    message: str


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    The voice platform reads the top-level ``error`` string, so the
    message stays flat rather than nested.

    Example:
        {
            "error": "Invalid signature",
            "code": "UNAUTHORIZED"
        }
    """

    error: str
    code: ErrorCode
    details: list[ErrorDetail] | None = None
