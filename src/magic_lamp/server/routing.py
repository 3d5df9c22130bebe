"""Route table for the fixtures app.

Paths use brace placeholders: ``{name}`` matches one segment,
``{name:path}`` matches the rest of the path, slashes included. Routes
are compiled to regexes once, when added.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from magic_lamp.errors import MethodNotAllowed, NotFound

# regex pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "path": r".+?",
}

_PARAM_RE = re.compile(r"\{(\w+)(?::(\w+))?\}")


def compile_path(path: str) -> re.Pattern[str]:
    """Compile a route path like ``/fixtures/{name:path}`` to a regex.

    Raises ``KeyError`` for an unknown converter.
    """
    pattern = ""
    position = 0
    for match in _PARAM_RE.finditer(path):
        pattern += re.escape(path[position : match.start()])
        param_name, param_type = match.group(1), match.group(2) or "str"
        pattern += f"(?P<{param_name}>{CONVERTERS[param_type]})"
        position = match.end()
    pattern += re.escape(path[position:])
    return re.compile(f"^{pattern}/?$")


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    regex: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]


class Router:
    """Ordered list of routes; the first matching path wins.

    Usage::

        router = Router()
        router.add("/fixtures/{name:path}", show, methods=("GET",))
        match = router.match("GET", "/fixtures/orders/order")
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def add(
        self,
        path: str,
        handler: Callable[..., Any],
        methods: tuple[str, ...] = ("GET",),
    ) -> Route:
        """Add a route."""
        route = Route(
            path=path,
            handler=handler,
            methods=frozenset(m.upper() for m in methods),
            regex=compile_path(path),
        )
        self._routes.append(route)
        return route

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method.

        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        allowed: set[str] = set()
        for route in self._routes:
            found = route.regex.match(path)
            if found is None:
                continue
            if method in route.methods:
                return RouteMatch(route=route, path_params=found.groupdict())
            allowed.update(route.methods)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")
