"""Frugal exception hierarchy.

Shared across the registry, dispatcher and routing surface so every
module raises and catches the same types.
"""

from typing import Any


class FrugalError(Exception):
    """Base for all frugal-specific errors."""


class ConfigurationError(FrugalError):
    """Raised when controllers are wired incorrectly.

    Startup-time fault: undeclared controllers, writes to a frozen
    registry, handler names that don't resolve. Never caught by the
    library itself.
    """


class ResponseAlreadySent(FrugalError):  # noqa: N818
    """A ``ResponseWriter`` was asked to write a second response."""


def error_body(message: str, status: int) -> dict[str, Any]:
    """The JSON body for every error response: ``{"error": ..., "status": ...}``."""
    return {"error": message, "status": status}


class HTTPException(FrugalError):
    """A deliberate, recoverable request failure.

    Raised from controller methods. The dispatcher converts it into a
    JSON response with exactly this status::

        raise HTTPException("Forbidden", 403)
        # -> 403 {"error":"Forbidden","status":403}

    Attributes stay assignable: the interpreter and ``contextlib`` set
    ``__traceback__`` on it while it propagates.
    """

    # Capability marker checked by is_declared_failure(). Classes that
    # don't inherit from HTTPException can set it to opt in.
    __http_exception__ = True

    def __init__(self, message: str, status: int = 500) -> None:
        super().__init__(message, status)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return f"{self.status}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status={self.status!r})"


class NotFound(HTTPException):  # noqa: N818
    """404: the requested resource doesn't exist."""

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(message, 404)


def is_declared_failure(exc: BaseException) -> bool:
    """True if *exc* should be answered with its own status and message.

    Checks the ``__http_exception__`` marker and the shape of the payload
    rather than class identity, so duplicated or re-exported exception
    classes are still recognised.
    """
    if getattr(exc, "__http_exception__", False) is not True:
        return False
    status = getattr(exc, "status", None)
    message = getattr(exc, "message", None)
    return (
        isinstance(status, int)
        and not isinstance(status, bool)
        and 100 <= status <= 599
        and isinstance(message, str)
    )
