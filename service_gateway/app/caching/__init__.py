"""
Gateway caching package.

Provides the response cache used by the API Gateway to avoid redundant
upstream calls. Entries are short-lived and expire lazily.
"""

from .response_cache import CachedResponse, ResponseCache

__all__ = [
    "CachedResponse",
    "ResponseCache",
]
