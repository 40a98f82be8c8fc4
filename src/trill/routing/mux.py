"""Composable mux — route registration, sub-routers, and the route walk.

A ``Mux`` records everything in registration order: endpoints, inline
child muxes (``with_``/``group``), and mounted sub-routers
(``route``/``mount``). ``walk()`` replays that record as a flat stream
of ``WalkedRoute`` items, each carrying the full middleware chain that
wraps its handler. Matching happens on a trie ``Router`` compiled from
the same walk, so what gets documented is exactly what gets served.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from trill._internal.types import Handler, MiddlewareFunc
from trill.errors import ConfigurationError
from trill.http.request import Request
from trill.http.response import Response
from trill.routing.route import Route, WalkedRoute
from trill.routing.router import WILDCARD, Router, parse_path
from trill.server.handler import handle_request

METHODS: frozenset[str] = frozenset(
    {"CONNECT", "DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT", "TRACE"}
)


def join_path(prefix: str, path: str) -> str:
    """Join a mount prefix and a route path.

    A bare ``"/"`` route under a prefix is the prefix itself::

        join_path("", "/")              -> "/"
        join_path("/articles", "/")     -> "/articles"
        join_path("/articles", "/:id")  -> "/articles/:id"
    """
    if not prefix:
        return path
    if path == "/":
        return prefix
    return prefix.rstrip("/") + path


def _check_path(path: str) -> None:
    if not path.startswith("/"):
        msg = f"Route path {path!r} must begin with '/'."
        raise ConfigurationError(msg)
    parse_path(path)


@dataclass(frozen=True, slots=True)
class _Endpoint:
    method: str
    path: str
    handler: Handler


@dataclass(frozen=True, slots=True)
class _Mount:
    prefix: str
    mux: Mux


class Mux:
    """A composable HTTP router.

    Usage::

        r = Mux()
        r.use(request_id, logger, recoverer)
        r.get("/", index)

        def articles(r: Mux) -> None:
            r.with_(paginate).get("/", list_articles)
            r.post("/", create_article)

        r.route("/articles", articles)
        r.mount("/admin", admin_router())

        for route in r.walk():
            print(route.method, route.path)

    Middleware must be added with ``use()`` before any routes on the
    same mux; inline children created by ``with_()`` carry their own.
    """

    __slots__ = ("_entries", "_middleware", "_parent", "_router")

    def __init__(self, *, _parent: Mux | None = None) -> None:
        self._middleware: list[MiddlewareFunc] = []
        self._entries: list[_Endpoint | _Mount | Mux] = []
        # Set for inline children from with_() and group()
        self._parent = _parent
        self._router: Router | None = None

    # -- Middleware --

    def use(self, *middleware: MiddlewareFunc) -> Mux:
        """Append mux-wide middleware.

        Raises ``ConfigurationError`` once routes have been registered,
        since earlier routes would silently miss it.
        """
        if self._entries:
            msg = "All middleware must be added with use() before routes on a mux."
            raise ConfigurationError(msg)
        for mw in middleware:
            if not callable(mw):
                msg = f"Middleware {mw!r} is not callable."
                raise ConfigurationError(msg)
        self._middleware.extend(middleware)
        return self

    @property
    def middleware(self) -> tuple[MiddlewareFunc, ...]:
        """This mux's own middleware, not including inherited ones."""
        return tuple(self._middleware)

    # -- Composition --

    def with_(self, *middleware: MiddlewareFunc) -> Mux:
        """Return an inline child mux with extra middleware.

        Routes registered on the child share this mux's path space::

            r.with_(paginate).get("/", list_articles)
        """
        child = Mux(_parent=self)
        child.use(*middleware)
        self._add_entry(child)
        return child

    def group(self, fn: Callable[[Mux], Any]) -> Mux:
        """Build an inline child mux with *fn* (same path space, own middleware)."""
        child = Mux(_parent=self)
        self._add_entry(child)
        fn(child)
        return child

    def route(self, prefix: str, fn: Callable[[Mux], Any]) -> Mux:
        """Build a sub-router with *fn* and mount it at *prefix*."""
        sub = Mux()
        fn(sub)
        self.mount(prefix, sub)
        return sub

    def mount(self, prefix: str, mux: Mux) -> None:
        """Attach another mux under *prefix*."""
        if not isinstance(mux, Mux):
            msg = f"Cannot mount {type(mux).__name__} at {prefix!r}; expected a Mux."
            raise ConfigurationError(msg)
        _check_path(prefix)
        self._add_entry(_Mount(prefix=prefix, mux=mux))

    # -- Registration --

    def handle(self, path: str, handler: Handler) -> None:
        """Register *handler* for every method at *path*."""
        self._register(WILDCARD, path, handler)

    def method(self, method: str, path: str, handler: Handler) -> None:
        """Register *handler* for one HTTP *method* at *path*."""
        token = method.upper()
        if token not in METHODS:
            msg = f"Unsupported HTTP method {method!r}."
            raise ConfigurationError(msg)
        self._register(token, path, handler)

    def get(self, path: str, handler: Handler) -> None:
        self.method("GET", path, handler)

    def post(self, path: str, handler: Handler) -> None:
        self.method("POST", path, handler)

    def put(self, path: str, handler: Handler) -> None:
        self.method("PUT", path, handler)

    def patch(self, path: str, handler: Handler) -> None:
        self.method("PATCH", path, handler)

    def delete(self, path: str, handler: Handler) -> None:
        self.method("DELETE", path, handler)

    def head(self, path: str, handler: Handler) -> None:
        self.method("HEAD", path, handler)

    def options(self, path: str, handler: Handler) -> None:
        self.method("OPTIONS", path, handler)

    def _register(self, method: str, path: str, handler: Handler) -> None:
        if not callable(handler):
            msg = f"Handler for {method} {path!r} is not callable."
            raise ConfigurationError(msg)
        _check_path(path)
        self._add_entry(_Endpoint(method=method, path=path, handler=handler))

    def _add_entry(self, entry: _Endpoint | _Mount | Mux) -> None:
        self._entries.append(entry)
        mux: Mux | None = self
        while mux is not None:
            mux._router = None
            mux = mux._parent

    # -- Walk --

    def walk(self) -> Iterator[WalkedRoute]:
        """Yield every registered route once, in registration order.

        Lazy: routes are produced as the caller iterates, so an
        exception raised by the consumer stops the traversal.

        Raises ``ConfigurationError`` if a mux is mounted inside itself.
        """
        yield from self._walk("", (), ())

    def _walk(
        self,
        prefix: str,
        inherited: tuple[MiddlewareFunc, ...],
        ancestors: tuple[int, ...],
    ) -> Iterator[WalkedRoute]:
        if id(self) in ancestors:
            msg = f"Mux mounted inside itself at {prefix!r}."
            raise ConfigurationError(msg)
        ancestors = (*ancestors, id(self))
        chain = (*inherited, *self._middleware)

        for entry in self._entries:
            match entry:
                case _Endpoint():
                    yield WalkedRoute(
                        method=entry.method,
                        path=join_path(prefix, entry.path),
                        handler=entry.handler,
                        middleware=chain,
                    )
                case _Mount():
                    yield from entry.mux._walk(join_path(prefix, entry.prefix), chain, ancestors)
                case Mux():
                    yield from entry._walk(prefix, chain, ancestors)

    def routes(self) -> list[WalkedRoute]:
        """Return the full walk as a list."""
        return list(self.walk())

    # -- Dispatch --

    def compile(self) -> Router:
        """Build a trie ``Router`` from the current walk."""
        router = Router()
        for walked in self.walk():
            router.add(
                Route(
                    path=walked.path,
                    handler=walked.handler,
                    methods=frozenset({walked.method}),
                    middleware=walked.middleware,
                )
            )
        router.compile()
        return router

    async def dispatch(self, request: Request) -> Response:
        """Match *request*, run its middleware chain, and return a Response.

        The compiled router is cached until the next registration on
        this mux or on one of its ``with_()``/``group()`` children.
        Registrations on a mounted mux after the first dispatch are not
        seen until something is registered here.
        """
        if self._parent is not None:
            msg = "Inline muxes created by with_() or group() cannot dispatch."
            raise ConfigurationError(msg)
        if self._router is None:
            self._router = self.compile()
        return await handle_request(self._router, request)

    def __repr__(self) -> str:
        return f"Mux(entries={len(self._entries)}, middleware={len(self._middleware)})"
