"""Trie router used by ``Mux.dispatch``.

``Mux.compile()`` feeds it the walked routes; after ``compile()`` the
trie is frozen. Matching prefers static segments, then parameter
segments in registration order, then a trailing catch-all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from trill.errors import ConfigurationError, MethodNotAllowed, NotFound
from trill.routing.params import segment_regex
from trill.routing.route import PathSegment, Route, RouteMatch

WILDCARD = "*"

_FLASK_PARAM = re.compile(r"<[^/<>]*>")


def _param_segment(part: str, path: str) -> PathSegment:
    if part == WILDCARD:
        return PathSegment(value=part, is_param=True, param_name=WILDCARD, param_type="path")
    if part.startswith(":"):
        return PathSegment(value=part, is_param=True, param_name=part[1:])
    name, _, param_type = part[1:-1].partition(":")
    param_type = param_type or "str"
    segment_regex(param_type, path)
    return PathSegment(value=part, is_param=True, param_name=name, param_type=param_type)


def parse_path(path: str) -> list[PathSegment]:
    """Split a route path into segments.

    Accepted forms::

        "/articles"               static
        "/articles/{id}"          parameter, any segment
        "/articles/{id:int}"      parameter with a converter
        "/articles/:id"           colon parameter
        "/files/{rest:path}"      catch-all, named
        "/static/*"               catch-all, captured as "*"

    ``"/"`` parses to no segments. Raises ``ConfigurationError`` for
    ``<param>`` segments and unknown converters.
    """
    if _FLASK_PARAM.search(path):
        msg = f"Route path {path!r} uses <param> syntax. Use {{param}} or :param instead."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in filter(None, path.split("/")):
        braced = part.startswith("{") and part.endswith("}")
        colon = part.startswith(":") and len(part) > 1
        if braced or colon or part == WILDCARD:
            segments.append(_param_segment(part, path))
        else:
            segments.append(PathSegment(value=part))
    return segments


@dataclass(slots=True)
class _Node:
    static: dict[str, _Node] = field(default_factory=dict)
    params: list[_ParamEdge] = field(default_factory=list)
    # Trailing catch-all: parameter name plus its routes by method
    rest_name: str = ""
    rest: dict[str, Route] = field(default_factory=dict)
    routes: dict[str, Route] = field(default_factory=dict)

    def param_child(self, segment: PathSegment) -> _Node:
        for edge in self.params:
            if edge.name == segment.param_name and edge.param_type == segment.param_type:
                return edge.node
        edge = _ParamEdge(
            name=segment.param_name or "",
            param_type=segment.param_type,
            regex=segment_regex(segment.param_type),
        )
        self.params.append(edge)
        return edge.node


@dataclass(slots=True)
class _ParamEdge:
    name: str
    param_type: str
    regex: re.Pattern[str]
    node: _Node = field(default_factory=_Node)


def _pick(routes: dict[str, Route], method: str) -> Route | None:
    return routes.get(method) or routes.get(WILDCARD)


class Router:
    """Trie of routes keyed by path segment.

    Usage::

        router = Router()
        router.add(Route("/articles/:id", get_article, frozenset({"GET"})))
        router.compile()
        router.match("GET", "/articles/12").path_params  # {"id": "12"}
    """

    __slots__ = ("_frozen", "_root")

    def __init__(self) -> None:
        self._root = _Node()
        self._frozen = False

    def add(self, route: Route) -> None:
        """Insert *route*. A later route for the same path and method wins."""
        if self._frozen:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for segment in parse_path(route.path):
            if segment.param_type == "path":
                node.rest_name = segment.param_name or "path"
                node.rest.update(dict.fromkeys(route.methods, route))
                return
            if segment.is_param:
                node = node.param_child(segment)
            else:
                node = node.static.setdefault(segment.value, _Node())
        node.routes.update(dict.fromkeys(route.methods, route))

    def compile(self) -> None:
        """Freeze the trie."""
        self._frozen = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route for *method* and *path*.

        An exact method wins over a wildcard (``*``) registration on the
        same path. Raises ``NotFound`` when no path matches and
        ``MethodNotAllowed`` when the path matches under other methods.
        """
        parts = [part for part in path.split("/") if part]
        found = self._find(self._root, parts, {})
        if found is None:
            raise NotFound(f"No route matches {method} {path!r}")

        routes, params = found
        route = _pick(routes, method)
        if route is None:
            raise MethodNotAllowed(frozenset(routes))
        return RouteMatch(route=route, path_params=params)

    def _find(
        self,
        node: _Node,
        parts: list[str],
        params: dict[str, str],
    ) -> tuple[dict[str, Route], dict[str, str]] | None:
        if not parts:
            return (node.routes, params) if node.routes else None

        head, tail = parts[0], parts[1:]

        child = node.static.get(head)
        if child is not None:
            found = self._find(child, tail, params)
            if found is not None:
                return found

        for edge in node.params:
            if edge.regex.match(head):
                found = self._find(edge.node, tail, {**params, edge.name: head})
                if found is not None:
                    return found

        if node.rest:
            return node.rest, {**params, node.rest_name: "/".join(parts)}
        return None
