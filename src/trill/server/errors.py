"""Error handling for dispatched requests.

Maps HTTPError exceptions and unexpected failures to Response objects.
"""

import logging

from trill.errors import HTTPError
from trill.http.request import Request
from trill.http.response import Response

logger = logging.getLogger("trill.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a plain-text Response carrying its headers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    resp = Response(body=detail).with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.error(
        "500 %s %s", request.method, request.path, exc_info=(type(exc), exc, exc.__traceback__)
    )
    return Response(body="Internal Server Error", status=500)
