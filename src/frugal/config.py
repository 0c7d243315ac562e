"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no
string-key dict lookups. ``AppConfig.from_env()`` builds one from the
process environment, loading a ``.env`` file first.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from frugal.errors import ConfigurationError

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, debug=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode, requires debug=True)
    reload_dirs: tuple[str, ...] = ()

    # Logging
    access_log: bool = True
    log_level: str = "info"

    @classmethod
    def from_env(
        cls,
        prefix: str = "FRUGAL_",
        *,
        dotenv: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> "AppConfig":
        """Build a config from environment variables.

        Reads ``{prefix}HOST``, ``{prefix}PORT`` (falling back to a bare
        ``PORT``), ``{prefix}DEBUG``, ``{prefix}ACCESS_LOG`` and
        ``{prefix}LOG_LEVEL``. Unset variables keep the defaults.

        Args:
            prefix: Variable name prefix.
            dotenv: Load ``.env`` from the working directory first.
                Existing environment variables are not overridden.
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigurationError: If a port or boolean value can't be parsed.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)
        env = os.environ if environ is None else environ
        defaults = cls()

        port_raw = env.get(f"{prefix}PORT") or env.get("PORT")
        return cls(
            host=env.get(f"{prefix}HOST", defaults.host),
            port=_parse_port(port_raw) if port_raw else defaults.port,
            debug=_parse_bool(env, f"{prefix}DEBUG", defaults.debug),
            access_log=_parse_bool(env, f"{prefix}ACCESS_LOG", defaults.access_log),
            log_level=env.get(f"{prefix}LOG_LEVEL", defaults.log_level).lower(),
        )


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        msg = f"Invalid port {value!r}: expected an integer"
        raise ConfigurationError(msg) from None
    if not 0 <= port <= 65535:
        msg = f"Invalid port {port}: expected 0-65535"
        raise ConfigurationError(msg)
    return port


def _parse_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = env.get(key)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    msg = f"Invalid boolean {value!r} for {key}"
    raise ConfigurationError(msg)
