"""Request pipeline — matches a route and runs its middleware chain.

The only place that calls user handlers and middleware. Converts their
return values through ``negotiate()`` and maps failures to responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from trill._internal.invoke import invoke
from trill.errors import HTTPError
from trill.http.request import Request
from trill.http.response import Response
from trill.middleware.protocol import Next
from trill.server.errors import handle_http_error, handle_internal_error
from trill.server.negotiation import negotiate

if TYPE_CHECKING:
    from trill.routing.route import Route
    from trill.routing.router import Router


def build_pipeline(route: Route) -> Next:
    """Wrap a route's handler in its middleware, outermost first."""

    async def endpoint(req: Request) -> Response:
        return negotiate(await invoke(route.handler, req))

    handler: Next = endpoint
    for mw in reversed(route.middleware):
        outer = handler
        mw_ref = mw

        async def make_next(req: Request, _mw: Any = mw_ref, _next: Next = outer) -> Response:
            return negotiate(await invoke(_mw, req, _next))

        handler = make_next

    return handler


async def handle_request(router: Router, request: Request) -> Response:
    """Dispatch *request* through *router*, always returning a Response."""
    try:
        match = router.match(request.method, request.path)
        request = request.with_path_params(match.path_params)
        return await build_pipeline(match.route)(request)
    except HTTPError as exc:
        return handle_http_error(exc, request)
    except Exception as exc:
        return handle_internal_error(exc, request)
