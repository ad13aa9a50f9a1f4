"""
Upstream client for Gateway.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from shared.logging import get_logger
from shared.errors import UpstreamError

USER_AGENT = "AciTracker-Gateway/1.0"


@dataclass(frozen=True)
class UpstreamResponse:
    """Normalized result of one upstream round trip."""

    status: int
    content_type: str
    body: bytes


class UpstreamClient:
    """Client that forwards allowlisted GETs to the fixed upstream service.

    Requests carry no query string or body from the caller. Failures are
    not retried; every transport error surfaces as UpstreamError.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport
        self.logger = get_logger("gateway.upstream_client")

    def _client_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headers": {"User-Agent": USER_AGENT}}
        # Leave httpx's default timeout in place unless one is configured
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return kwargs

    async def forward(self, upstream_path: str, default_content_type: str) -> UpstreamResponse:
        """GET ``upstream_path`` and return status, content type and the raw body.

        The body is kept as bytes so it stays consistent with whatever
        charset the upstream declares in its Content-Type.
        """
        url = f"{self.base_url}{upstream_path}"

        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            self.logger.error("Upstream request failed", url=url, error=str(exc))
            raise UpstreamError(str(exc) or type(exc).__name__, details={"url": url}) from exc

        content_type = response.headers.get("content-type") or default_content_type
        self.logger.debug(
            "Upstream response received",
            url=url,
            status_code=response.status_code,
            content_type=content_type,
        )
        return UpstreamResponse(
            status=response.status_code,
            content_type=content_type,
            body=response.content,
        )
