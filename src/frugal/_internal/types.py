"""Shared type aliases used across frugal modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Controller method: bound, variable signature, sync or async
ControllerMethod: TypeAlias = Callable[..., Any]

# Handler installed on the routing surface: (request, writer) -> None | Awaitable[None]
SurfaceHandler: TypeAlias = Callable[..., Any]
