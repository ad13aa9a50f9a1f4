"""
Pre-routing request guard: header budget and method restriction.
"""

import json
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from shared.base_service import error_response
from shared.errors import GatewayError, HeaderTooLargeError, MethodNotAllowedError
from shared.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector

DEFAULT_MAX_HEADER_SIZE = 8192
ALLOWED_METHOD = "GET"


def serialized_header_size(headers: Iterable[Tuple[str, str]]) -> int:
    """Size in bytes of the headers rendered as a compact JSON object.

    Names are lower-cased and repeated headers are joined with ", ".
    """
    merged: Dict[str, str] = {}
    for name, value in headers:
        name = name.lower()
        if name in merged:
            merged[name] = f"{merged[name]}, {value}"
        else:
            merged[name] = value
    rendered = json.dumps(merged, separators=(",", ":"), ensure_ascii=False)
    return len(rendered.encode("utf-8"))


class RequestGuard:
    """Reject requests before any auth or cache work happens."""

    def __init__(self, max_header_size: int = DEFAULT_MAX_HEADER_SIZE):
        self.max_header_size = max_header_size

    def check(self, method: str, headers: Iterable[Tuple[str, str]]) -> None:
        size = serialized_header_size(headers)
        if size > self.max_header_size:
            raise HeaderTooLargeError(details={"size": size, "limit": self.max_header_size})

        if method.upper() != ALLOWED_METHOD:
            raise MethodNotAllowedError()


class RequestGuardMiddleware(BaseHTTPMiddleware):
    """Apply the RequestGuard to every request, whatever its path."""

    def __init__(self, app, guard: RequestGuard, metrics: Optional["MetricsCollector"] = None):
        super().__init__(app)
        self.guard = guard
        self.metrics = metrics
        self.logger = get_logger("gateway.request_guard")

    async def dispatch(self, request: Request, call_next):
        try:
            self.guard.check(request.method, request.headers.items())
        except GatewayError as exc:
            self.logger.warning(
                "Request rejected by guard",
                code=exc.code,
                method=request.method,
                path=request.url.path,
                **exc.details
            )
            if self.metrics:
                self.metrics.record_error(exc.code)
            return error_response(exc)

        return await call_next(request)
