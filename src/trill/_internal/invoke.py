"""Invoke helpers — call sync or async handlers uniformly.

Trill handlers can be ``def`` or ``async def``. The dispatcher is the
only place that calls user handlers, and it goes through this helper
so the sync/async check lives in exactly one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        def ping(request):
            return "pong"

        async def list_articles(request):
            return await store.all()
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
