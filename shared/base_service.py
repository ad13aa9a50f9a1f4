"""
Base service class for AciTracker Gateway services.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry
from typing import Optional
import time

from shared.config import GatewayConfig, get_config
from shared.logging import configure_logging, get_logger, set_request_id, clear_context
from shared.metrics import get_metrics_collector
from shared.errors import GatewayError


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, service_name: str, config: Optional[GatewayConfig] = None):
        self.service_name = service_name
        self.config = config or get_config()
        self.port = self.config.port
        self.logger = get_logger(f"{service_name}.service")
        self.metrics = get_metrics_collector(service_name, CollectorRegistry())

        configure_logging(service_name, self.config.log_level)

        self.app = self._create_app()
        self._setup_middleware()
        self._setup_exception_handlers()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application.

        Documentation routes are disabled and trailing slashes are not
        redirected: only explicitly registered paths are served.
        """
        return FastAPI(
            title=f"{self.service_name.title()} Service",
            description=f"AciTracker {self.service_name.title()} Service",
            version="1.0.0",
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
            redirect_slashes=False,
        )

    def _metrics_endpoint_label(self, path: str) -> str:
        """Label used for per-endpoint metrics. Override to bound cardinality."""
        return path

    def _setup_middleware(self):
        """Set up middleware."""

        # Request timing and correlation middleware
        @self.app.middleware("http")
        async def add_request_timing(request: Request, call_next):
            request_id = set_request_id()
            start_time = time.time()

            try:
                response = await call_next(request)

                duration = time.time() - start_time

                self.metrics.record_http_request(
                    method=request.method,
                    endpoint=self._metrics_endpoint_label(request.url.path),
                    status_code=response.status_code,
                    duration=duration
                )

                self.logger.info(
                    "HTTP request",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration * 1000, 2)
                )

                response.headers["X-Request-ID"] = request_id
                return response
            finally:
                clear_context()

    def _setup_exception_handlers(self):
        """Render every failure as a single-field JSON error body."""

        @self.app.exception_handler(GatewayError)
        async def gateway_exception_handler(request: Request, exc: GatewayError):
            """Handle GatewayError."""
            self.metrics.record_error(exc.code)
            return error_response(exc)

        @self.app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle general exceptions."""
            self.logger.error("Unhandled exception", error=str(exc), exc_info=True)
            self.metrics.record_error("INTERNAL_ERROR")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error"}
            )

    def run(self):
        """Run the service."""
        import uvicorn

        if self.config.metrics_port:
            self.metrics.start_metrics_server(self.config.metrics_port)
            self.logger.info("Metrics server started", port=self.config.metrics_port)

        uvicorn.run(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower()
        )


def error_response(exc: GatewayError) -> JSONResponse:
    """Build the client-facing JSON response for a gateway error."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump()
    )
