"""Declarative controller surface.

Method decorators only mark functions; ``@controller`` walks the class
body once it exists and feeds the marks to the registry::

    @controller("/api")
    class ItemController:
        @get("/:id")
        def show(self, request):
            return {"id": request.path_params["id"]}

        @post("/")
        @status(202)
        async def create(self, request):
            return await request.json()
"""

from collections.abc import Callable
from typing import Any, TypeVar

from frugal.routing.registry import RouteRegistry, registry as default_registry
from frugal.routing.table import HttpMethod

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

# Attribute names used to stash marks on the decorated function
_ROUTES_ATTR = "__frugal_routes__"
_STATUS_ATTR = "__frugal_status__"


def _target(func: Any) -> Any:
    """The function carrying marks (unwraps staticmethod/classmethod)."""
    return getattr(func, "__func__", func)


def route(method: HttpMethod | str, path: str) -> Callable[[F], F]:
    """Mark a method as the handler for *method* + *path*.

    Stacking several route decorators declares several routes; the
    decorator closest to the function is declared first.
    """
    http_method = HttpMethod.parse(method)

    def decorator(func: F) -> F:
        target = _target(func)
        marks: list[tuple[HttpMethod, str]] = list(getattr(target, _ROUTES_ATTR, ()))
        marks.append((http_method, path))
        setattr(target, _ROUTES_ATTR, tuple(marks))
        return func

    return decorator


def get(path: str) -> Callable[[F], F]:
    return route(HttpMethod.GET, path)


def put(path: str) -> Callable[[F], F]:
    return route(HttpMethod.PUT, path)


def post(path: str) -> Callable[[F], F]:
    return route(HttpMethod.POST, path)


def patch(path: str) -> Callable[[F], F]:
    return route(HttpMethod.PATCH, path)


def delete(path: str) -> Callable[[F], F]:
    return route(HttpMethod.DELETE, path)


def status(code: int) -> Callable[[F], F]:
    """Override the status sent when the handler returns a value.

    Order relative to the route decorators doesn't matter.
    """

    def decorator(func: F) -> F:
        setattr(_target(func), _STATUS_ATTR, code)
        return func

    return decorator


def controller(
    prefix: str = "",
    *,
    registry: RouteRegistry | None = None,
) -> Callable[[C], C]:
    """Class decorator: declare *prefix* and every marked method.

    Only the class's own body is scanned, in definition order. Inherited
    handlers are not re-declared for subclasses.
    """
    target_registry = registry if registry is not None else default_registry

    def decorator(cls: C) -> C:
        target_registry.declare_prefix(cls, prefix)
        for name, attr in vars(cls).items():
            func = _target(attr)
            for method, path in getattr(func, _ROUTES_ATTR, ()):
                target_registry.declare_route(cls, method, path, name)
            code = getattr(func, _STATUS_ATTR, None)
            if code is not None:
                target_registry.declare_status(cls, name, code)
        return cls

    return decorator
