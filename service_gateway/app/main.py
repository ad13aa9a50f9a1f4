"""
AciTracker Gateway service.

Fronts a single upstream backend with a fixed allowlist of read-only
routes, a static bearer-token check and a short-lived response cache.
"""

from typing import Optional

import httpx
from fastapi import Request

from shared.base_service import BaseService
from shared.config import GatewayConfig
from shared.errors import NotFoundError

from .adapters.upstream_client import UpstreamClient
from .auth.bearer import BearerAuthenticator
from .caching.response_cache import ResponseCache
from .domain.gateway_handler import GatewayHandler
from .domain.request_guard import RequestGuard, RequestGuardMiddleware
from .routes import RouteTable


class GatewayService(BaseService):
    """API Gateway service implementation."""

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.route_table = RouteTable()
        super().__init__("gateway", config)

        self.authenticator = BearerAuthenticator(self.config.gateway_bearer_token)
        self.cache = ResponseCache(self.config.cache_ttl_ms)
        self.upstream_client = UpstreamClient(
            self.config.upstream_base,
            timeout=self.config.upstream_timeout_seconds,
            transport=transport,
        )
        self.handler = GatewayHandler(
            self.route_table,
            self.authenticator,
            self.cache,
            self.upstream_client,
            metrics=self.metrics,
            single_flight=self.config.single_flight,
        )

        self._setup_gateway_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

        self.logger.info(
            "Gateway configured",
            upstream=self.config.upstream_base,
            cache_ttl_ms=self.config.cache_ttl_ms,
            max_header_size=self.config.max_header_size,
            bearer_token_configured=self.config.bearer_token_configured,
        )

    def _setup_middleware(self):
        """Install the request guard inside the timing middleware."""
        self.app.add_middleware(
            RequestGuardMiddleware,
            guard=RequestGuard(self.config.max_header_size),
            metrics=self.metrics,
        )
        super()._setup_middleware()

    def _metrics_endpoint_label(self, path: str) -> str:
        return path if path in self.route_table else "unmatched"

    def _setup_gateway_routes(self):
        """Set up the allowlisted routes and the catch-all."""
        for route in self.route_table:
            self.app.add_api_route(
                route.public_path,
                self.handler.handle,
                methods=["GET"],
                include_in_schema=False,
            )

        @self.app.get("/{unmatched_path:path}", include_in_schema=False)
        async def not_found(request: Request):
            raise NotFoundError()


def create_app(config: Optional[GatewayConfig] = None):
    """Create FastAPI application."""
    service = GatewayService(config)
    return service.app


def main():
    """Console entry point."""
    service = GatewayService()
    service.run()


if __name__ == "__main__":
    main()
