"""Frugal application class.

Mutable during setup (controller registration). Frozen at runtime when
``app.run()`` or ``__call__()`` is first invoked, at which point the
not-found handler is installed and the routing surface starts serving.
"""

import logging
import threading
import time

from frugal._internal.asgi import Message, Receive, Scope, Send
from frugal.config import AppConfig
from frugal.dispatch import Binding, Dispatcher
from frugal.errors import ConfigurationError
from frugal.routing.registry import RouteRegistry, registry as default_registry
from frugal.server.surface import RoutingSurface

logger = logging.getLogger("frugal.app")
access_logger = logging.getLogger("frugal.access")

_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> None:
    """Attach a stream handler to the root logger unless one exists."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        msg = f"Unknown log level {level!r}"
        raise ConfigurationError(msg)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=numeric, format=_LOG_FORMAT)
    else:
        root.setLevel(numeric)


class App:
    """The frugal application.

    Usage::

        app = App(AppConfig.from_env())
        app.register(DefaultController, UserController)
        app.run()

    Thread safety:
        Registration happens on one thread at startup. The freeze
        transition uses a Lock + double-check so exactly one thread
        mounts the routing surface even if the server calls
        ``__call__()`` concurrently on the first requests.
    """

    __slots__ = ("_dispatcher", "_freeze_lock", "_frozen", "_registry", "_surface", "config")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        registry: RouteRegistry | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self._registry = registry if registry is not None else default_registry
        self._dispatcher = Dispatcher(registry=self._registry)
        self._surface: RoutingSurface | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Setup --

    def register(self, *controllers: type) -> "App":
        """Register controller classes. Returns the app for chaining."""
        if self._frozen:
            msg = "Cannot register controllers after the app has started serving."
            raise ConfigurationError(msg)
        for controller in controllers:
            self._dispatcher.register(controller)
        return self

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def routes(self) -> tuple[Binding, ...]:
        """Installed controller routes, in registration order."""
        return self._dispatcher.bindings

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the registry and serve the app with pounce.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        configure_logging(self.config.log_level)
        self._registry.freeze()
        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info("frugal routing: %d route(s) installed", len(self.routes))
        logger.info("Visit http://%s:%d", _host, _port)

        from frugal.server.dev import run_server

        run_server(
            self,
            _host,
            _port,
            reload=self.config.debug,
            reload_dirs=self.config.reload_dirs,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        self._ensure_frozen()
        assert self._surface is not None

        if scope["type"] != "http" or not self.config.access_log:
            await self._surface(scope, receive, send)
            return

        status = 0
        start = time.perf_counter()

        async def send_and_record(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        try:
            await self._surface(scope, receive, send_and_record)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            access_logger.info(
                "%s %s %d %.1fms",
                scope["method"],
                scope["path"],
                status,
                elapsed_ms,
            )

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._surface = self._dispatcher.middleware()
            self._frozen = True
