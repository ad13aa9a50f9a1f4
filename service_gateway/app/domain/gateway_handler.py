"""
Per-request orchestration for allowlisted routes.

Route resolution, authentication, cache lookup, forwarding on a miss and
cache population all happen here. The RequestGuard runs earlier, as
middleware, so a request reaching this handler is a GET with headers
inside the budget.
"""

import asyncio
from collections import defaultdict
from contextlib import nullcontext
from typing import TYPE_CHECKING, Dict, Optional

from fastapi import Request, Response

from shared.errors import BadGatewayError
from shared.logging import get_logger

from ..adapters.upstream_client import UpstreamClient
from ..auth.bearer import BearerAuthenticator
from ..caching.response_cache import CachedResponse, ResponseCache
from ..routes import RouteDescriptor, RouteTable

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector

CACHE_HEADER = "X-Cache"
CACHE_HIT = "HIT"
CACHE_MISS = "MISS"


class GatewayHandler:
    """Serve allowlisted routes from cache or from the upstream."""

    def __init__(
        self,
        routes: RouteTable,
        authenticator: BearerAuthenticator,
        cache: ResponseCache,
        upstream: UpstreamClient,
        *,
        metrics: Optional["MetricsCollector"] = None,
        single_flight: bool = False,
    ):
        self.routes = routes
        self.authenticator = authenticator
        self.cache = cache
        self.upstream = upstream
        self.metrics = metrics
        self.single_flight = single_flight
        self.logger = get_logger("gateway.handler")
        self._inflight: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def handle(self, request: Request) -> Response:
        route = self.routes.resolve(request.url.path, request.url.query)
        self.authenticator.authenticate(request.headers.get("Authorization"))

        cached = self._lookup(route)
        if cached is not None:
            return self._respond(cached.status, cached.content_type, cached.body, CACHE_HIT)

        if not self.single_flight:
            entry = await self._forward_and_store(route)
            return self._respond(entry.status, entry.content_type, entry.body, CACHE_MISS)

        async with self._inflight[route.public_path]:
            # Another request may have filled the slot while we waited
            cached = self._lookup(route, count=False)
            if cached is not None:
                return self._respond(cached.status, cached.content_type, cached.body, CACHE_HIT)
            entry = await self._forward_and_store(route)
        return self._respond(entry.status, entry.content_type, entry.body, CACHE_MISS)

    def _lookup(self, route: RouteDescriptor, count: bool = True) -> Optional[CachedResponse]:
        cached = self.cache.lookup(route.public_path)
        if cached is not None:
            self.logger.debug("Cache hit", route=route.public_path)
            self._count("cache_hits_total", route=route.public_path)
        elif count:
            self.logger.debug("Cache miss", route=route.public_path)
            self._count("cache_misses_total", route=route.public_path)
        return cached

    async def _forward_and_store(self, route: RouteDescriptor) -> CachedResponse:
        """Forward to the upstream and cache whatever response comes back.

        A failed forward leaves the cache untouched.
        """
        try:
            with self._timed("upstream_request_duration_seconds", route=route.public_path):
                result = await self.upstream.forward(route.upstream_path, route.default_content_type)
        except Exception as exc:
            self.logger.error("Error forwarding request", route=route.public_path, error=str(exc))
            self._count("upstream_errors_total", route=route.public_path)
            raise BadGatewayError() from exc

        self._count("upstream_requests_total", route=route.public_path, status_code=str(result.status))
        return self.cache.store(route.public_path, result.status, result.content_type, result.body)

    def _count(self, metric_name: str, **labels) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, **labels)

    def _timed(self, metric_name: str, **labels):
        if self.metrics:
            return self.metrics.time_operation(metric_name, **labels)
        return nullcontext()

    @staticmethod
    def _respond(status: int, content_type: str, body: bytes, cache_status: str) -> Response:
        return Response(
            content=body,
            status_code=status,
            headers={"Content-Type": content_type, CACHE_HEADER: cache_status},
        )
