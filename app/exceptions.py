from typing import Any, Mapping, Optional


class LeChefError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(LeChefError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnauthorizedError(LeChefError):
    """Raised when a mutation or action is called without an identity."""

    http_status = 401
    default_message = "Not authenticated"
    default_code = "UNAUTHORIZED"


class NotFoundError(LeChefError):
    """Raised when a requested resource was not found.

    Ownership mismatches are reported with this error too, so callers cannot
    probe for records that belong to somebody else.
    """

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(LeChefError):
    """Raised when a resource conflict occurs (e.g., slug already taken)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class AIServiceError(LeChefError):
    """Raised when the AI provider (or a page fetched for it) keeps failing."""

    http_status = 502
    default_message = "AI provider request failed"
    default_code = "AI_SERVICE_ERROR"


class AIResponseError(AIServiceError):
    """Raised when the AI reply cannot be parsed or lacks required fields."""

    default_message = "AI response could not be parsed"
    default_code = "AI_RESPONSE_ERROR"
