"""
Domain utilities for the Gateway Service.

Includes the pre-routing request guard and the per-request handler that
ties authentication, caching and forwarding together.
"""

from .gateway_handler import GatewayHandler
from .request_guard import RequestGuard, RequestGuardMiddleware

__all__ = [
    "GatewayHandler",
    "RequestGuard",
    "RequestGuardMiddleware",
]
