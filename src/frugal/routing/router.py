"""Trie-based router used by the routing surface.

Paths are split into segments; static segments are tried before
parameter segments, and parameter segments before catch-alls. Unlike
a frozen router, routes can be added at any time, so handlers registered
after the surface is mounted are still reachable.
"""

import re
from dataclasses import dataclass, field

from frugal.errors import ConfigurationError, NotFound
from frugal.routing.route import PathSegment, Route, RouteMatch

# Regex for each braced converter: ``{id:int}``
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"           -> [PathSegment("users")]
        "/users/:id"       -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/users/{id:int}"  -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{rest:path}" -> [..., PathSegment("{rest:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith(":") and len(part) > 1:
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:]))
        elif part.startswith("{") and part.endswith("}"):
            param_name, _, param_type = part[1:-1].partition(":")
            param_type = param_type or "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown path converter {param_type!r} in route {path!r}"
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("catch_all", "children", "param_edges", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Parameter edges, tried in insertion order
        self.param_edges: list[_ParamEdge] = []
        # Catch-all routes ({name:path}), consume the rest of the path
        self.catch_all: _CatchAllEdge | None = None
        # Routes terminating at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    param_name: str
    routes_by_method: dict[str, Route] = field(default_factory=dict)


class Router:
    """Method + path lookup table.

    Usage::

        router = Router()
        router.add(Route("GET", "/users/:id", handler))
        match = router.match("GET", "/users/42")
        match.path_params  # {"id": "42"}
    """

    __slots__ = ("_count", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._count = 0

    def add(self, route: Route) -> Route | None:
        """Add *route*. Returns the route it replaced, if any.

        A second route for the same method and path replaces the first
        (last registration wins).
        """
        node = self._root
        for seg in parse_path(route.path):
            if seg.is_param and seg.param_type == "path":
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(param_name=seg.param_name or "path")
                return self._put(node.catch_all.routes_by_method, route)

            if seg.is_param:
                node = self._param_node(node, seg)
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        return self._put(node.routes_by_method, route)

    def _put(self, routes_by_method: dict[str, Route], route: Route) -> Route | None:
        previous = routes_by_method.get(route.method)
        routes_by_method[route.method] = route
        if previous is None:
            self._count += 1
        return previous

    @staticmethod
    def _param_node(node: _TrieNode, seg: PathSegment) -> _TrieNode:
        name = seg.param_name or ""
        for edge in node.param_edges:
            if edge.param_name == name and edge.param_type == seg.param_type:
                return edge.node
        edge = _ParamEdge(
            param_name=name,
            param_type=seg.param_type,
            regex=re.compile(f"^{CONVERTERS[seg.param_type]}$"),
            node=_TrieNode(),
        )
        node.param_edges.append(edge)
        return edge.node

    @property
    def routes(self) -> list[Route]:
        """Every registered route, depth-first."""
        result: list[Route] = []
        self._collect_routes(self._root, result)
        return result

    def _collect_routes(self, node: _TrieNode, result: list[Route]) -> None:
        result.extend(node.routes_by_method.values())
        for child in node.children.values():
            self._collect_routes(child, result)
        for edge in node.param_edges:
            self._collect_routes(edge.node, result)
        if node.catch_all is not None:
            result.extend(node.catch_all.routes_by_method.values())

    def __len__(self) -> int:
        return self._count

    def match(self, method: str, path: str) -> RouteMatch:
        """Match *method* and *path* against the registered routes.

        Raises ``NotFound`` when no route matches. A path that exists
        only for other methods is also not found.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {}, method)
        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")
        route, params = result
        return RouteMatch(route=route, path_params=params)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
        method: str,
    ) -> tuple[Route, dict[str, str]] | None:
        if index == len(parts):
            route = node.routes_by_method.get(method)
            return (route, params) if route is not None else None

        part = parts[index]

        # 1. Static child (exact match)
        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1, params, method)
            if result is not None:
                return result

        # 2. Parameter edges
        for edge in node.param_edges:
            if edge.regex.match(part):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, new_params, method)
                if result is not None:
                    return result

        # 3. Catch-all
        if node.catch_all is not None:
            route = node.catch_all.routes_by_method.get(method)
            if route is not None:
                remaining = "/".join(parts[index:])
                return route, {**params, node.catch_all.param_name: remaining}

        return None
