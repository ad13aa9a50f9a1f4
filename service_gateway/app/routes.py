"""
Allowlisted gateway routes.

The table below is the single source of truth for which public paths are
forwarded, to which upstream path, and with which fallback content type.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

from shared.errors import NotFoundError


@dataclass(frozen=True)
class RouteDescriptor:
    """A public path permitted for forwarding."""

    public_path: str
    upstream_path: str
    default_content_type: str


ALLOWED_ROUTES: Tuple[RouteDescriptor, ...] = (
    RouteDescriptor("/health", "/health", "application/json"),
    RouteDescriptor("/report", "/report", "text/markdown"),
    RouteDescriptor("/manifest", "/manifest", "application/json"),
    RouteDescriptor("/new", "/new", "text/csv"),
    RouteDescriptor("/api/must-reads", "/api/must-reads", "application/json"),
    RouteDescriptor("/api/must-reads/md", "/api/must-reads/md", "text/markdown"),
    RouteDescriptor("/api/summaries", "/api/summaries", "application/json"),
)


class RouteTable:
    """Exact-match lookup over the allowlisted routes."""

    def __init__(self, routes: Tuple[RouteDescriptor, ...] = ALLOWED_ROUTES):
        by_path = {}
        for route in routes:
            if route.public_path in by_path:
                raise ValueError(f"Duplicate allowlisted route: {route.public_path}")
            by_path[route.public_path] = route
        self._routes: Mapping[str, RouteDescriptor] = MappingProxyType(by_path)

    def resolve(self, path: str, query: str = "") -> RouteDescriptor:
        """Return the route for ``path`` or raise NotFoundError.

        No normalization is applied: trailing slashes, sub-paths and any
        query string all fall through to NotFound.
        """
        if query:
            raise NotFoundError()
        route = self._routes.get(path)
        if route is None:
            raise NotFoundError()
        return route

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)
