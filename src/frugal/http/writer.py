"""Response writer: the capability handed to controller methods.

A handler that wants full control writes through the writer; the
dispatcher checks ``writer.committed`` once the handler settles and
leaves the response alone if it is set::

    @delete("/:id")
    def destroy(self, request, response):
        response.json({"deleted": request.path_params["id"]})
"""

from typing import Any

from frugal.errors import ResponseAlreadySent
from frugal.http.response import Response, empty_response, json_response


class ResponseWriter:
    """Collects exactly one response for one request.

    Writing is synchronous: the routing surface sends the committed
    ``Response`` after the handler returns, so sync and async handlers
    use the same API.
    """

    __slots__ = ("_headers", "_response")

    def __init__(self) -> None:
        self._response: Response | None = None
        self._headers: list[tuple[str, str]] = []

    @property
    def committed(self) -> bool:
        """True once a response has been written."""
        return self._response is not None

    @property
    def response(self) -> Response | None:
        """The committed response, with any extra headers applied."""
        if self._response is None:
            return None
        if not self._headers:
            return self._response
        return self._response.with_headers(tuple(self._headers))

    def header(self, name: str, value: str) -> "ResponseWriter":
        """Add a header to whatever response is eventually committed."""
        self._headers.append((name, value))
        return self

    def json(self, data: Any, status: int = 200) -> None:
        """Commit a JSON response."""
        self.write(json_response(data, status))

    def empty(self, status: int = 204) -> None:
        """Commit a body-less response."""
        self.write(empty_response(status))

    def send(
        self,
        body: str | bytes,
        *,
        status: int = 200,
        content_type: str = "text/plain; charset=utf-8",
    ) -> None:
        """Commit a raw body with an explicit content type."""
        self.write(Response(body=body, status=status, content_type=content_type))

    def write(self, response: Response) -> None:
        """Commit *response*. Raises ``ResponseAlreadySent`` on a second write."""
        if self._response is not None:
            msg = "A response has already been written for this request."
            raise ResponseAlreadySent(msg)
        self._response = response

    def reset(self) -> None:
        """Discard the committed response and headers (error paths only)."""
        self._response = None
        self._headers.clear()
