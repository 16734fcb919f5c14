"""Error taxonomy for the payment relay and its mapping to HTTP responses."""
from typing import Any, Dict, Optional
import logging

from fastapi.responses import JSONResponse, PlainTextResponse, Response

logger = logging.getLogger(__name__)


class RelayError(Exception):
    status_code = 500

    def __init__(self, message: str, *, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(RelayError):
    """A required field is missing or malformed."""

    status_code = 400


class UpstreamError(RelayError):
    """The gateway call failed or returned an error payload."""

    status_code = 500


class SignatureError(RelayError):
    """Webhook signature did not match. Rendered as plain text."""

    status_code = 400

    def __init__(self, message: str = "Invalid signature", *, details: Any = None) -> None:
        super().__init__(message, details=details)


class GatewayError(Exception):
    """
    A gateway call failed. Raised by both the real and the mock gateway clients.

    ``details`` carries the gateway's error body when it sent one, otherwise a
    description of the failure.
    """

    def __init__(self, message: str, *, details: Any = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.details = details if details is not None else message
        self.status_code = status_code


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in payment relay: %s", exc, exc_info=True)
        return {
            "error": "internal_error",
            "details": {"error": str(exc), "context": context or {}},
        }

    def to_response(self, exc: RelayError) -> Response:
        if isinstance(exc, SignatureError):
            return PlainTextResponse(exc.message, status_code=exc.status_code)
        return JSONResponse(exc.to_body(), status_code=exc.status_code)
