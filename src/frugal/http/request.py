"""Immutable HTTP request.

Frozen metadata with async body access. Controllers read path
parameters, query values and the body from here.
"""

import json as json_module
from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qsl

from frugal._internal.asgi import Receive, Scope
from frugal.http.multidict import MultiDict

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata is frozen at creation. The body is read lazily with
    ``await request.body()`` / ``.json()`` / ``.text()`` / ``.form()``
    and cached.
    """

    method: str
    path: str
    headers: MultiDict
    query: MultiDict
    path_params: dict[str, str]
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable body cache (the dict is shared, the field is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    def with_path_params(self, path_params: dict[str, str]) -> "Request":
        """Return a copy carrying *path_params*. The body cache is shared."""
        return replace(self, path_params=path_params)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body. Cached after the first call."""
        if "body" in self._cache:
            return self._cache["body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["body"] = result
        return result

    async def stream(self) -> AsyncIterator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON. An empty body yields ``None``."""
        raw = await self.body()
        if not raw:
            return None
        return json_module.loads(raw)

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def form(self) -> MultiDict:
        """Parse a URL-encoded form body. Cached after the first call.

        A missing Content-Type is treated as URL-encoded. Blank values
        are kept, and repeated fields are available via ``get_list``.

        Raises:
            ValueError: If the body has a different content type.
        """
        if "form" in self._cache:
            return self._cache["form"]

        content_type = self.content_type or FORM_CONTENT_TYPE
        if content_type.split(";")[0].strip().lower() != FORM_CONTENT_TYPE:
            msg = f"Unsupported form content type: {content_type!r}"
            raise ValueError(msg)

        raw = await self.body()
        result = MultiDict(parse_qsl(raw.decode("utf-8"), keep_blank_values=True))
        self._cache["form"] = result
        return result

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        path_params: dict[str, str] | None = None,
    ) -> "Request":
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=MultiDict.from_raw_headers(scope.get("headers", ())),
            query=MultiDict.from_query_string(scope.get("query_string", b"")),
            path_params=path_params or {},
            client=tuple(client) if client else None,
            _receive=receive,
        )
