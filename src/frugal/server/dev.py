"""Server startup via pounce.

Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but
frugal hands over a live ``App`` object, so ``pounce.Server`` is used
directly with the ASGI callable.
"""

from typing import Any

from frugal.errors import ConfigurationError


def run_server(
    app: Any,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (frugal App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on source changes (development only).
        reload_dirs: Extra directories to watch alongside cwd.

    Raises ``ConfigurationError`` if pounce is not installed.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError:
        msg = (
            "Serving requires the 'pounce' ASGI server. "
            "Install it with: pip install frugal-routing[server]"
        )
        raise ConfigurationError(msg) from None

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_dirs=reload_dirs,
    )
    Server(config, app).run()
