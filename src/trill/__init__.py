"""Trill — a small composable HTTP router that documents itself.

Routes and middleware are recorded in registration order, so the same
mux that serves requests can be walked to produce an API description.

Basic usage::

    from trill import Mux
    from trill.docgen import generate
    from trill.middleware import logger, recoverer

    r = Mux()
    r.use(logger, recoverer)

    def ping(request):
        '''Liveness probe. Always answers pong.'''
        return "pong"

    r.get("/ping", ping)

    print(generate(r).to_yaml())
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DocsConfig",
    "HTTPError",
    "MethodNotAllowed",
    "Mux",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "TrillError",
    "WalkedRoute",
    "describe",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trill`` fast while providing a clean top-level API.
    """
    if name in ("Mux", "WalkedRoute"):
        from trill import routing as _routing

        return getattr(_routing, name)

    if name == "DocsConfig":
        from trill.config import DocsConfig

        return DocsConfig

    if name == "Request":
        from trill.http.request import Request

        return Request

    if name == "Response":
        from trill.http.response import Response

        return Response

    if name == "Next":
        from trill.middleware.protocol import Next

        return Next

    if name == "describe":
        from trill.introspect import describe

        return describe

    if name in ("TrillError", "ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound"):
        from trill import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
