"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    request_id -- Tag each request with an X-Request-Id
    logger -- Access log on the ``trill.access`` logger
    recoverer -- Log unexpected exceptions and answer 500
"""

from trill.middleware.builtin import logger, recoverer, request_id
from trill.middleware.protocol import Middleware, Next

__all__ = [
    "Middleware",
    "Next",
    "logger",
    "recoverer",
    "request_id",
]
