"""Immutable HTTP response.

Handlers rarely build these by hand; ``negotiate()`` turns plain return
values into one. Middleware derives new responses with ``with_*``.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """Status, body, content type, and extra headers in send order."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a copy with *headers* appended after the existing ones."""
        return replace(self, headers=self.headers + tuple(headers.items()))

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), default)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body_bytes.decode("utf-8")

    @property
    def json(self) -> Any:
        return json_module.loads(self.body_bytes)
