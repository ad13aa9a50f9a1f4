"""
Adapters package for the Gateway Service.

Contains the HTTP client wrapper for the upstream backend. Adapters
encapsulate base URLs, request shapes and the mapping of transport
failures to shared errors.

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .upstream_client import UpstreamClient, UpstreamResponse

__all__ = [
    "UpstreamClient",
    "UpstreamResponse",
]
