"""API exception hierarchy for consistent error handling.

All API exceptions inherit from VoicehookAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses.
"""

from voicehook.api.models.errors import ErrorCode


class VoicehookAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(VoicehookAPIError):
    """Raised when request validation fails."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class ConfigurationError(VoicehookAPIError):
    """Raised when a required secret or setting is missing."""

    status_code = 500
    error_code = ErrorCode.CONFIGURATION_ERROR


class InvalidSignatureError(VoicehookAPIError):
    """Raised when the webhook signature does not validate."""

    status_code = 401
    error_code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str = "Invalid signature") -> None:
        super().__init__(message)

