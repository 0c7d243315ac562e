"""HTTP response value and JSON encoding.

``Response`` is immutable: each ``.with_*()`` call returns a new one.
``json_response`` and ``empty_response`` build the two shapes the
dispatcher writes.
"""

import dataclasses
import json as json_module
from datetime import date, datetime, time
from enum import Enum
from typing import Any

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclasses.dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response.

    Construct with a body, then chain ``.with_*()`` calls to adjust
    status and headers.
    """

    body: str | bytes = b""
    status: int = 200
    content_type: str | None = JSON_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return dataclasses.replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return dataclasses.replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: tuple[tuple[str, str], ...]) -> "Response":
        """Return a new Response with additional headers."""
        return dataclasses.replace(self, headers=(*self.headers, *headers))

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    @property
    def json(self) -> Any:
        """Body parsed as JSON (``None`` for an empty body)."""
        raw = self.body_bytes
        return json_module.loads(raw) if raw else None

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


def _encode_default(value: Any) -> Any:
    """``json.dumps`` fallback for common non-JSON Python values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def dumps(data: Any) -> str:
    """Serialize *data* as compact JSON (``{"a":1}``, no spaces).

    NaN and infinities raise ``ValueError`` instead of producing
    invalid JSON.
    """
    return json_module.dumps(
        data,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_encode_default,
    )


def json_response(data: Any, status: int = 200) -> Response:
    """A JSON response. Raises ``TypeError`` or ``ValueError`` if *data* isn't serializable."""
    return Response(body=dumps(data), status=status)


def empty_response(status: int = 204) -> Response:
    """A response with no body and no content type."""
    return Response(body=b"", status=status, content_type=None)
