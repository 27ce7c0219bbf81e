"""Call sync or async callables uniformly.

Middleware handlers and plugin hooks can be ``def`` or ``async def``.
The sync/async check lives here and nowhere else::

    result = await invoke(handler, request, next)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
