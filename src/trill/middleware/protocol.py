"""Middleware protocol and the ``Next`` type.

A middleware is any callable matching::

    async def mw(request: Request, next: Next) -> Response: ...

Functions and objects with ``__call__`` both qualify. A middleware may
return anything ``negotiate()`` accepts; the pipeline converts it to a
``Response`` before the next outer link sees it.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from trill.http.request import Request
from trill.http.response import Response

# The rest of the chain, ending in the handler
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Structural type for trill middleware.

    Either form works::

        async def paginate(request: Request, next: Next) -> Response:
            page = request.query.get_int("page", 1)
            return await next(request.with_context(page=page))

        class StoreContext:
            def __init__(self, store):
                self.store = store

            async def __call__(self, request: Request, next: Next) -> Response:
                return await next(request.with_context(store=self.store))
    """

    async def __call__(self, request: Request, next: Next) -> Any: ...
