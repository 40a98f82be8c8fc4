"""Immutable HTTP request.

Frozen metadata plus the already-received body. Middleware that needs
to hand data down the chain returns a new request via ``with_context``
instead of mutating the one it was given.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from trill.http.headers import Headers
from trill.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` is filled in by the router once a route matches.
    ``context`` carries values set by middleware (request id, loaded
    objects) and is read-only from the handler's point of view.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        qs = str(self.query)
        if qs:
            return f"{self.path}?{qs}"
        return self.path

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body)

    def text(self) -> str:
        """Read the body as text (UTF-8)."""
        return self.body.decode("utf-8")

    def param(self, name: str, default: str | None = None) -> str | None:
        """Return a matched path parameter, or *default*."""
        return self.path_params.get(name, default)

    # -- Derivation --

    def with_path_params(self, params: Mapping[str, str]) -> Request:
        """Return a new Request with the matched path parameters."""
        return replace(self, path_params=dict(params))

    def with_context(self, **values: Any) -> Request:
        """Return a new Request with additional context values."""
        return replace(self, context=MappingProxyType({**self.context, **values}))

    # -- Factory --

    @classmethod
    def build(
        cls,
        method: str,
        target: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> Request:
        """Create a Request from a method and a ``path?query`` target."""
        path, _, query_string = target.partition("?")
        return cls(
            method=method.upper(),
            path=path or "/",
            headers=Headers.from_dict(headers or {}),
            query=QueryParams(query_string),
            body=body,
        )
