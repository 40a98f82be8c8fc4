"""Exceptions raised by trill.

``ConfigurationError`` and ``DocgenError`` signal programmer or input
mistakes and propagate to the caller. ``HTTPError`` and its subclasses
are caught by ``Mux.dispatch`` and answered with their status code.
"""

from dataclasses import dataclass


class TrillError(Exception):
    """Base for all trill-specific errors."""


class ConfigurationError(TrillError):
    """Invalid mux setup: a bad path, late ``use()``, or a mount cycle.

    Raised at registration time, or from ``Mux.walk()`` for cycles.
    """


class DocgenError(TrillError):
    """Bad input to docs generation, such as a malformed ``--substitute``."""


@dataclass(frozen=True, slots=True)
class HTTPError(TrillError):
    """A failure that is answered with *status* and a plain-text *detail*.

    *headers* are added to the error response as-is.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matches the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the path matches, but not for this method.

    The ``Allow`` header lists the registered methods, sorted.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow}",
            headers=(("Allow", allow),),
        )
