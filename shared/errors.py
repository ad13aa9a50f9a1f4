"""
Shared error handling for the AciTracker Gateway.

Every gateway failure is terminal and reported to the caller once, as a
small JSON body carrying a single ``error`` field.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str


class GatewayError(Exception):
    """Base exception for gateway request failures."""

    status_code: int = 500
    code: str = "GATEWAY_ERROR"
    default_message: str = "Gateway error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert to the client-facing error body."""
        return ErrorResponse(error=self.message)


class ServerMisconfiguredError(GatewayError):
    """The gateway has no bearer secret configured."""

    status_code = 500
    code = "SERVER_MISCONFIGURED"
    default_message = "Server configuration error: GATEWAY_BEARER_TOKEN not set"


class UnauthorizedError(GatewayError):
    """Missing, malformed or wrong bearer credential."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class MethodNotAllowedError(GatewayError):
    status_code = 405
    code = "METHOD_NOT_ALLOWED"
    default_message = "Method not allowed"


class HeaderTooLargeError(GatewayError):
    status_code = 413
    code = "HEADER_TOO_LARGE"
    default_message = "Request headers too large"


class NotFoundError(GatewayError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class BadGatewayError(GatewayError):
    """The forwarding attempt itself failed."""

    status_code = 502
    code = "BAD_GATEWAY"
    default_message = "Bad gateway"


class ExternalServiceError(Exception):
    """Raised by adapters when an external service call cannot complete."""

    def __init__(self, service: str, message: str = "External service error", details: Optional[Dict[str, Any]] = None):
        self.service = service
        self.message = f"{service}: {message}"
        self.details = details or {}
        super().__init__(self.message)


class UpstreamError(ExternalServiceError):
    """The upstream round trip failed before a response was obtained."""

    def __init__(self, message: str = "Upstream request failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("upstream", message, details)
