"""Route filtering by URI globs, middleware and HTTP methods."""

import re
from collections.abc import Iterable

from api_documentator.routing.base import Route
from api_documentator.text import matches_pattern

DEFAULT_METHODS = ("get", "post", "put", "patch", "delete")

_OPTIONAL = re.compile(r"\{([^}]+)\?\}")


class RouteCollector:
    """Selects the routes to document, keeping route-table order."""

    def __init__(self, routes: Iterable[Route] = ()):
        self.routes = list(routes)

    def collect(self, include=(), exclude=(), exclude_middleware=()) -> list[Route]:
        return [
            route for route in self.routes
            if self.should_include(route, include, exclude, exclude_middleware)
        ]

    @staticmethod
    def should_include(route: Route, include=(), exclude=(), exclude_middleware=()) -> bool:
        uri = route.uri.lstrip("/")

        # exclude wins over include
        if any(matches_pattern(p.lstrip("/"), uri) for p in exclude):
            return False

        if any(m in route.middleware for m in exclude_middleware):
            return False

        if not include:
            return True

        return any(matches_pattern(p.lstrip("/"), uri) for p in include)

    @staticmethod
    def allowed_methods(route: Route, allowed=DEFAULT_METHODS) -> list[str]:
        """Route methods (lower-cased, route order) that are also allowed."""
        allowed = {m.lower() for m in allowed}
        methods = []
        for method in route.methods:
            m = method.lower()
            if m in allowed and m not in methods:
                methods.append(m)
        return methods

    @staticmethod
    def normalize_path(route: Route) -> str:
        """``api/users/{user?}`` -> ``/api/users/{user}``."""
        path = _OPTIONAL.sub(r"{\1}", route.uri)
        return "/" + path.lstrip("/")
