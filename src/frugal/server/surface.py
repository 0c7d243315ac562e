"""ASGI routing surface: the HTTP collaborator the dispatcher installs into.

Owns path matching, builds ``Request`` objects, hands each handler a
fresh ``ResponseWriter`` and sends whatever the handler committed.
Handlers installed here have the shape ``handler(request, writer)`` and
may be sync or async.
"""

import logging

from frugal._internal.asgi import Receive, Scope, Send
from frugal._internal.invoke import invoke
from frugal._internal.types import SurfaceHandler
from frugal.errors import NotFound
from frugal.http.request import Request
from frugal.http.response import Response
from frugal.http.writer import ResponseWriter
from frugal.routing.route import Route
from frugal.routing.router import Router
from frugal.server.sender import send_response

logger = logging.getLogger("frugal.server")

_PLAIN_NOT_FOUND = Response(body="Not Found", status=404, content_type="text/plain; charset=utf-8")
_PLAIN_SERVER_ERROR = Response(
    body="Internal Server Error",
    status=500,
    content_type="text/plain; charset=utf-8",
)


class RoutingSurface:
    """Method + path dispatch as an ASGI application.

    Usage::

        surface = RoutingSurface()
        surface.add("GET", "/items/:id", show_item)
        surface.fallback(not_found)
        # serve ``surface`` with any ASGI server
    """

    __slots__ = ("_fallback", "_router")

    def __init__(self) -> None:
        self._router = Router()
        self._fallback: SurfaceHandler | None = None

    def add(self, method: str, path: str, handler: SurfaceHandler) -> Route | None:
        """Install *handler* for *method* + *path*. Returns the replaced route, if any."""
        return self._router.add(Route(method=method.upper(), path=path, handler=handler))

    def fallback(self, handler: SurfaceHandler) -> None:
        """Set the terminal handler, run when no route commits a response."""
        self._fallback = handler

    @property
    def has_fallback(self) -> bool:
        return self._fallback is not None

    @property
    def routes(self) -> list[Route]:
        return self._router.routes

    def __len__(self) -> int:
        return len(self._router)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _acknowledge_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        response = await self.handle(request)
        await send_response(response, send)

    async def handle(self, request: Request) -> Response:
        """Run the matching handler (then the fallback) and return the response."""
        writer = ResponseWriter()
        try:
            match = self._router.match(request.method, request.path)
        except NotFound:
            pass
        else:
            await self._run(match.route.handler, request.with_path_params(match.path_params), writer)

        if not writer.committed and self._fallback is not None:
            await self._run(self._fallback, request, writer)

        response = writer.response
        return response if response is not None else _PLAIN_NOT_FOUND

    async def _run(self, handler: SurfaceHandler, request: Request, writer: ResponseWriter) -> None:
        try:
            await invoke(handler, request, writer)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            writer.reset()
            writer.write(_PLAIN_SERVER_ERROR)


async def _acknowledge_lifespan(receive: Receive, send: Send) -> None:
    """Answer the ASGI lifespan protocol with no startup/shutdown work."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
