"""Exception hierarchy rendered by the application's exception handlers."""

from typing import Any, Dict, Optional


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP error response."""

    code: str = "API_ERROR"
    status_code: int = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_body(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.field:
            error["details"] = [{"field": self.field, "issue": self.message}]
        return {"error": error}


class InvalidInputError(ApiError):
    """Client-supplied data failed a precondition."""

    code = "INVALID_INPUT"
    status_code = 400


class NotFoundError(ApiError):
    """The referenced identifier does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class WebhookSendError(ApiError):
    """The outbound webhook request failed at the transport level."""

    code = "WEBHOOK_SEND_FAILED"
    status_code = 500
