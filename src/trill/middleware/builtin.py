"""Built-in middleware: request ids, access logging, panic recovery.

Plain async functions, so the docs generator can point at their
source like any user middleware::

    r = Mux()
    r.use(request_id, logger, recoverer)
"""

import itertools
import logging
import secrets
import socket
import time

from trill.errors import HTTPError
from trill.http.request import Request
from trill.http.response import Response
from trill.middleware.protocol import Next

REQUEST_ID_HEADER = "X-Request-Id"

access_log = logging.getLogger("trill.access")
server_log = logging.getLogger("trill.server")

_prefix = f"{socket.gethostname() or 'localhost'}/{secrets.token_hex(5)}"
_counter = itertools.count(1)


def next_request_id() -> str:
    """Return ``host/random-000001``-style ids, unique per process."""
    return f"{_prefix}-{next(_counter):06d}"


async def request_id(request: Request, next: Next) -> Response:
    """Tag the request with a request id.

    Reuses an incoming X-Request-Id header when present. The id is
    available as ``request.context["request_id"]`` and echoed back on
    the response.
    """
    rid = request.headers.get(REQUEST_ID_HEADER) or next_request_id()
    response = await next(request.with_context(request_id=rid))
    return response.with_header(REQUEST_ID_HEADER, rid)


async def logger(request: Request, next: Next) -> Response:
    """Log one access line per request on the ``trill.access`` logger."""
    start = time.perf_counter()
    response = await next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    rid = request.context.get("request_id")
    access_log.info(
        '%s"%s %s" %d %dB in %.3fms',
        f"[{rid}] " if rid else "",
        request.method,
        request.url,
        response.status,
        len(response.body_bytes),
        elapsed_ms,
    )
    return response


async def recoverer(request: Request, next: Next) -> Response:
    """Turn unexpected exceptions from inner handlers into a 500.

    ``HTTPError`` passes through untouched; the dispatcher maps it.
    """
    try:
        return await next(request)
    except HTTPError:
        raise
    except Exception:
        server_log.exception("panic recovered: %s %s", request.method, request.path)
        return Response(body="Internal Server Error", status=500)
