"""Process-wide, type-keyed route registry.

Populated while controller classes are defined (the decorators in
``frugal.routing.decorators`` are thin callers of this API), then read
once per controller by the dispatcher at bootstrap.

Lifecycle::

    registry.declare_prefix(UserController, "/users")
    registry.declare_route(UserController, "GET", "/:id", "show")
    registry.declare_status(UserController, "show", 200)
    ...
    registry.freeze()                     # optional: reject late writes
    table = registry.lookup(UserController)
"""

import threading
from dataclasses import dataclass, field
from types import MappingProxyType

from frugal.errors import ConfigurationError
from frugal.routing.table import HttpMethod, RouteEntry, RouteTable


@dataclass(slots=True)
class _PendingTable:
    """Mutable accumulator for one controller. Snapshotted by ``lookup``."""

    prefix: str = ""
    entries: list[RouteEntry] = field(default_factory=list)
    status_overrides: dict[str, int] = field(default_factory=dict)

    def snapshot(self) -> RouteTable:
        return RouteTable(
            prefix=self.prefix,
            entries=tuple(self.entries),
            status_overrides=MappingProxyType(dict(self.status_overrides)),
        )


class RouteRegistry:
    """Accumulates ``RouteTable`` data per controller class.

    Thread safety:
        Declarations normally happen at import time on one thread. The
        lock keeps appends consistent if modules are imported from
        several threads under free-threading.
    """

    __slots__ = ("_frozen", "_lock", "_tables")

    def __init__(self) -> None:
        self._tables: dict[type, _PendingTable] = {}
        self._lock = threading.Lock()
        self._frozen = False

    # -- Writes (registration phase) --

    def declare_prefix(self, controller: type, prefix: str = "") -> None:
        """Set the path prefix for *controller*. Last write wins."""
        with self._lock:
            self._table_for(controller).prefix = prefix

    def declare_route(
        self,
        controller: type,
        method: HttpMethod | str,
        path: str,
        handler_name: str,
    ) -> RouteEntry:
        """Append a route entry for *controller* and return it."""
        entry = RouteEntry(
            method=HttpMethod.parse(method),
            path=path,
            handler_name=handler_name,
        )
        with self._lock:
            self._table_for(controller).entries.append(entry)
        return entry

    def declare_status(self, controller: type, handler_name: str, code: int) -> None:
        """Set (or overwrite) the success status for *handler_name*."""
        if isinstance(code, bool) or not isinstance(code, int) or not 100 <= code <= 599:
            msg = f"Invalid HTTP status {code!r} for {controller.__name__}.{handler_name}"
            raise ConfigurationError(msg)
        with self._lock:
            self._table_for(controller).status_overrides[handler_name] = code

    # -- Lifecycle --

    def freeze(self) -> None:
        """Reject further declarations. Reads keep working."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        """Forget every table and unfreeze. Intended for tests."""
        with self._lock:
            self._tables.clear()
            self._frozen = False

    # -- Reads (dispatch phase) --

    def lookup(self, controller: type) -> RouteTable:
        """Return an immutable snapshot of *controller*'s table.

        Raises ``ConfigurationError`` if the class was never declared.
        """
        with self._lock:
            pending = self._tables.get(controller)
            if pending is None:
                name = getattr(controller, "__qualname__", repr(controller))
                msg = (
                    f"{name} has no route table. Decorate it with "
                    f"@controller(...) or declare it through the registry "
                    f"before registering it."
                )
                raise ConfigurationError(msg)
            return pending.snapshot()

    def is_declared(self, controller: type) -> bool:
        return controller in self._tables

    def controllers(self) -> tuple[type, ...]:
        """Declared controller classes, in first-declaration order."""
        with self._lock:
            return tuple(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, controller: object) -> bool:
        return controller in self._tables

    # -- Internal --

    def _table_for(self, controller: type) -> _PendingTable:
        """Get or lazily create the pending table. Caller holds the lock."""
        if self._frozen:
            name = getattr(controller, "__qualname__", repr(controller))
            msg = f"Cannot declare routes for {name}: the route registry is frozen."
            raise ConfigurationError(msg)
        if not isinstance(controller, type):
            msg = f"Controllers must be classes, got {controller!r}"
            raise ConfigurationError(msg)
        table = self._tables.get(controller)
        if table is None:
            table = _PendingTable()
            self._tables[controller] = table
        return table


# The default registry used by the decorators and the dispatcher.
registry = RouteRegistry()
