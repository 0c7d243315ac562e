"""Invoke helpers: call sync or async handlers uniformly.

Controller methods can be ``def`` or ``async def``, and may or may not
want the response writer. The signature check runs once, when a route
is bound; ``invoke`` runs per request.

Usage::

    from frugal._internal.invoke import WriterArg, invoke, writer_arg

    mode = writer_arg(handler)                    # at bind time
    result = await invoke(handler, request)       # per request
"""

import inspect
from enum import Enum
from typing import Any

from frugal.errors import ConfigurationError


class WriterArg(Enum):
    """How a controller method wants the response writer passed."""

    NONE = "none"
    POSITIONAL = "positional"
    KEYWORD = "keyword"


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def writer_arg(handler: Any) -> WriterArg:
    """Decide whether *handler* receives the response writer, and how.

    ``self`` is already bound, so ``def show(self, request, response)``
    takes it positionally, as does any ``*args`` signature. A
    keyword-only parameter named ``response`` takes it by keyword.
    Callables whose signature can't be read get only the request.

    Raises ``ConfigurationError`` when *handler* has no parameter to
    receive the request.
    """
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return WriterArg.NONE

    positional = 0
    keyword = False
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return WriterArg.POSITIONAL
        if param.kind is inspect.Parameter.KEYWORD_ONLY and param.name == "response":
            keyword = True
        elif param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    if positional == 0:
        name = getattr(handler, "__qualname__", repr(handler))
        msg = f"{name} must accept the request as its first argument."
        raise ConfigurationError(msg)
    if keyword:
        return WriterArg.KEYWORD
    return WriterArg.POSITIONAL if positional >= 2 else WriterArg.NONE
