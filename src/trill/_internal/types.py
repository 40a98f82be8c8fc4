"""Shared type aliases used across trill modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler — takes the request, returns anything negotiate() accepts
Handler: TypeAlias = Callable[..., Any]

# Middleware — ``async def mw(request, next) -> Response``
MiddlewareFunc: TypeAlias = Callable[..., Any]
