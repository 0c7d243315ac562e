"""Dispatcher: turns controller route tables into request handlers.

``register`` reads a controller's ``RouteTable`` once, instantiates the
controller, captures a bound method per route and installs one handler
per entry on the routing surface. Every installed handler runs the same
response-shaping rules:

1. Call the controller method (awaiting it when async).
2. Declared failure raised    -> its status, ``{"error": msg, "status": code}``.
3. Anything else raised       -> 500 ``Internal Server Error`` + error log.
4. Writer already committed   -> leave the response alone.
5. ``None`` returned          -> 204 with no body + warning log.
6. Value returned             -> JSON body; status is the override, else
                                 201 for POST, else 200.
"""

import logging
from dataclasses import dataclass

from frugal._internal.invoke import WriterArg, invoke, writer_arg
from frugal._internal.types import ControllerMethod, SurfaceHandler
from frugal.errors import ConfigurationError, error_body, is_declared_failure
from frugal.http.request import Request
from frugal.http.writer import ResponseWriter
from frugal.routing.registry import RouteRegistry, registry as default_registry
from frugal.routing.router import parse_path
from frugal.routing.table import HttpMethod
from frugal.server.surface import RoutingSurface

logger = logging.getLogger("frugal.dispatch")

NOT_FOUND_BODY = error_body("Not Found", 404)
INTERNAL_ERROR_BODY = error_body("Internal Server Error", 500)


def resolve_status(method: HttpMethod, override: int | None) -> int:
    """Success status for a handler that returned a value.

    An explicit override always wins, even over a POST's 201.
    """
    if override is not None:
        return override
    return 201 if method is HttpMethod.POST else 200


def not_found(request: Request, writer: ResponseWriter) -> None:
    """Terminal handler: 404 for anything no route answered."""
    writer.json(NOT_FOUND_BODY, 404)


@dataclass(frozen=True, slots=True)
class Binding:
    """One controller method bound to a full path."""

    controller: str
    method: HttpMethod
    path: str
    handler_name: str
    status: int
    func: ControllerMethod
    writer_arg: WriterArg

    @property
    def log_context(self) -> dict[str, str]:
        return {
            "controller": self.controller,
            "route": self.path,
            "handler": self.handler_name,
            "http_method": self.method.value,
        }


class Dispatcher:
    """Installs controller routes on a ``RoutingSurface``.

    Usage::

        dispatcher = Dispatcher()
        dispatcher.register(UserController)
        dispatcher.register(ItemController)
        asgi_app = dispatcher.middleware()

    Registering a route whose method and path are already installed
    replaces the earlier handler (last registration wins). Routes
    registered after ``middleware()`` are still reachable through the
    returned surface.
    """

    __slots__ = ("_installed", "_registry", "_surface")

    def __init__(
        self,
        surface: RoutingSurface | None = None,
        *,
        registry: RouteRegistry | None = None,
    ) -> None:
        self._surface = surface if surface is not None else RoutingSurface()
        self._registry = registry if registry is not None else default_registry
        # (binding, installed handler) in registration order
        self._installed: list[tuple[Binding, SurfaceHandler]] = []

    @property
    def surface(self) -> RoutingSurface:
        return self._surface

    @property
    def bindings(self) -> tuple[Binding, ...]:
        """Currently installed bindings, in registration order."""
        return tuple(binding for binding, _ in self._installed)

    def register(self, controller: type) -> None:
        """Instantiate *controller* and install a handler per route entry.

        Raises ``ConfigurationError`` if the controller has no route table,
        names a handler it doesn't define, routes a handler that takes no
        request, or uses a path pattern the router rejects. Nothing is
        installed when registration fails.
        """
        table = self._registry.lookup(controller)
        instance = controller()
        name = controller.__name__

        bindings: list[Binding] = []
        for entry in table.entries:
            path = table.full_path(entry)
            func = getattr(instance, entry.handler_name, None)
            if not callable(func):
                msg = (
                    f"{name}.{entry.handler_name} is routed as "
                    f"{entry.method} {path!r} but is not a method."
                )
                raise ConfigurationError(msg)
            parse_path(path)
            bindings.append(
                Binding(
                    controller=name,
                    method=entry.method,
                    path=path,
                    handler_name=entry.handler_name,
                    status=resolve_status(entry.method, table.status_for(entry.handler_name)),
                    func=func,
                    writer_arg=writer_arg(func),
                )
            )

        for binding in bindings:
            handler = self._make_handler(binding)
            replaced = self._surface.add(binding.method.value, binding.path, handler)
            if replaced is not None:
                self._installed = [
                    pair for pair in self._installed if pair[1] is not replaced.handler
                ]
                logger.debug(
                    "Route %s %s replaced by %s.%s",
                    binding.method,
                    binding.path,
                    binding.controller,
                    binding.handler_name,
                    extra=binding.log_context,
                )
            self._installed.append((binding, handler))

    def middleware(self) -> RoutingSurface:
        """Install the terminal not-found handler and return the surface."""
        self._surface.fallback(not_found)
        return self._surface

    # -- Per-request handling --

    def _make_handler(self, binding: Binding) -> SurfaceHandler:
        async def handle(request: Request, writer: ResponseWriter) -> None:
            try:
                if binding.writer_arg is WriterArg.POSITIONAL:
                    result = await invoke(binding.func, request, writer)
                elif binding.writer_arg is WriterArg.KEYWORD:
                    result = await invoke(binding.func, request, response=writer)
                else:
                    result = await invoke(binding.func, request)
            except Exception as exc:
                writer.reset()
                if is_declared_failure(exc):
                    status = exc.status  # type: ignore[attr-defined]
                    writer.json(error_body(exc.message, status), status)  # type: ignore[attr-defined]
                else:
                    _internal_error(binding, writer)
                return

            if writer.committed:
                return

            if result is None:
                logger.warning(
                    "Method returned no response: %s.%s (%s %s); sent 204 No Content",
                    binding.controller,
                    binding.handler_name,
                    binding.method,
                    binding.path,
                    extra=binding.log_context,
                )
                writer.empty(204)
                return

            try:
                writer.json(result, binding.status)
            except Exception:
                _internal_error(binding, writer)

        handle.__name__ = f"{binding.controller}.{binding.handler_name}"
        handle.__qualname__ = handle.__name__
        return handle


def _internal_error(binding: Binding, writer: ResponseWriter) -> None:
    """Log the active exception with route context and write a generic 500."""
    logger.error(
        "Unknown exception thrown: %s.%s (%s %s)",
        binding.controller,
        binding.handler_name,
        binding.method,
        binding.path,
        exc_info=True,
        extra=binding.log_context,
    )
    writer.reset()
    writer.json(INTERNAL_ERROR_BODY, 500)
