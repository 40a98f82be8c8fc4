"""Route, RouteMatch, and WalkedRoute frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``      (is_param=False)
    Param:   ``/{id}``       (is_param=True, param_name="id")
    Colon:   ``/:id``        (is_param=True, param_name="id")
    Typed:   ``/{id:int}``   (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route: path, handler, and the middleware wrapping it."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    middleware: tuple[Callable[..., Any], ...] = ()


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]


@dataclass(frozen=True, slots=True)
class WalkedRoute:
    """One registered route as produced by ``Mux.walk()``.

    ``middleware`` is ordered outermost first: inherited mux-wide
    middleware, then each nested mux's own, then inline ``with_()``
    middleware closest to the handler.
    """

    method: str
    path: str
    handler: Callable[..., Any]
    middleware: tuple[Callable[..., Any], ...] = ()
