"""Route table types: the per-controller routing metadata.

Pure data. A ``RouteTable`` is the frozen snapshot the registry hands
to the dispatcher; nothing here has behaviour beyond path composition.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from frugal.errors import ConfigurationError


class HttpMethod(StrEnum):
    """HTTP methods a controller route can be declared for."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: "str | HttpMethod") -> "HttpMethod":
        """Coerce a method name (any case) to ``HttpMethod``.

        Raises ``ConfigurationError`` for unsupported methods.
        """
        if isinstance(value, HttpMethod):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            msg = f"Unsupported HTTP method {value!r}. Expected one of: {allowed}"
            raise ConfigurationError(msg) from None


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One declared route: method + relative path -> controller method name."""

    method: HttpMethod
    path: str
    handler_name: str


@dataclass(frozen=True, slots=True)
class RouteTable:
    """Routing metadata for one controller class.

    ``entries`` keeps declaration order. ``status_overrides`` maps a
    handler name to the status used when that handler returns a value.
    """

    prefix: str = ""
    entries: tuple[RouteEntry, ...] = ()
    status_overrides: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def full_path(self, entry: RouteEntry) -> str:
        """``prefix + entry.path``: plain concatenation, no normalisation."""
        return self.prefix + entry.path

    def status_for(self, handler_name: str) -> int | None:
        """The explicit status override for *handler_name*, if any."""
        return self.status_overrides.get(handler_name)
