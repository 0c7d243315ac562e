"""Tests for frugal.server.surface: the ASGI routing surface."""

import logging

import pytest

from frugal.http.writer import ResponseWriter
from frugal.server.surface import RoutingSurface
from frugal.testing import TestClient


def _hello(request, writer: ResponseWriter) -> None:
    writer.json({"hello": request.path_params.get("name", "world")})


class TestRouting:
    @pytest.mark.asyncio
    async def test_matched_handler_runs(self) -> None:
        surface = RoutingSurface()
        surface.add("GET", "/hello/:name", _hello)
        async with TestClient(surface) as client:
            response = await client.get("/hello/ada")
        assert response.status == 200
        assert response.json == {"hello": "ada"}

    @pytest.mark.asyncio
    async def test_async_handler(self) -> None:
        async def handler(request, writer: ResponseWriter) -> None:
            writer.json(await request.json())

        surface = RoutingSurface()
        surface.add("post", "/echo", handler)
        async with TestClient(surface) as client:
            response = await client.post("/echo", json={"a": 1})
        assert response.json == {"a": 1}

    @pytest.mark.asyncio
    async def test_no_route_no_fallback_is_plain_404(self) -> None:
        surface = RoutingSurface()
        async with TestClient(surface) as client:
            response = await client.get("/missing")
        assert response.status == 404
        assert response.text == "Not Found"
        assert response.content_type == "text/plain; charset=utf-8"

    @pytest.mark.asyncio
    async def test_fallback_answers_unmatched(self) -> None:
        surface = RoutingSurface()
        surface.fallback(lambda request, writer: writer.json({"fallback": request.path}, 404))
        async with TestClient(surface) as client:
            response = await client.get("/nothing/here")
        assert response.status == 404
        assert response.json == {"fallback": "/nothing/here"}

    @pytest.mark.asyncio
    async def test_fallback_runs_when_handler_does_not_commit(self) -> None:
        surface = RoutingSurface()
        surface.add("GET", "/silent", lambda request, writer: None)
        surface.fallback(lambda request, writer: writer.empty(410))
        async with TestClient(surface) as client:
            response = await client.get("/silent")
        assert response.status == 410

    @pytest.mark.asyncio
    async def test_fallback_skipped_after_commit(self) -> None:
        calls = []
        surface = RoutingSurface()
        surface.add("GET", "/", _hello)
        surface.fallback(lambda request, writer: calls.append(request))
        async with TestClient(surface) as client:
            await client.get("/")
        assert calls == []

    @pytest.mark.asyncio
    async def test_routes_added_after_serving(self) -> None:
        surface = RoutingSurface()
        async with TestClient(surface) as client:
            assert (await client.get("/late")).status == 404
            surface.add("GET", "/late", _hello)
            assert (await client.get("/late")).status == 200

    def test_add_returns_replaced_route(self) -> None:
        surface = RoutingSurface()
        assert surface.add("GET", "/", _hello) is None
        replaced = surface.add("GET", "/", lambda request, writer: None)
        assert replaced is not None
        assert replaced.handler is _hello
        assert len(surface) == 1

    def test_has_fallback(self) -> None:
        surface = RoutingSurface()
        assert not surface.has_fallback
        surface.fallback(lambda request, writer: None)
        assert surface.has_fallback


class TestHandlerErrors:
    @pytest.mark.asyncio
    async def test_raising_handler_is_plain_500(self, caplog: pytest.LogCaptureFixture) -> None:
        def broken(request, writer: ResponseWriter) -> None:
            writer.json({"partial": True})
            raise RuntimeError("boom")

        surface = RoutingSurface()
        surface.add("GET", "/broken", broken)
        with caplog.at_level(logging.ERROR, logger="frugal.server"):
            async with TestClient(surface) as client:
                response = await client.get("/broken")

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert any(r.name == "frugal.server" for r in caplog.records)


class TestHeaders:
    @pytest.mark.asyncio
    async def test_writer_headers_are_sent(self) -> None:
        def handler(request, writer: ResponseWriter) -> None:
            writer.header("X-Trace", "abc").json({})

        surface = RoutingSurface()
        surface.add("GET", "/", handler)
        async with TestClient(surface) as client:
            response = await client.get("/")
        assert response.header("x-trace") == "abc"

    @pytest.mark.asyncio
    async def test_query_string_reaches_handler(self) -> None:
        def handler(request, writer: ResponseWriter) -> None:
            writer.json({"q": request.query.get("q")})

        surface = RoutingSurface()
        surface.add("GET", "/search", handler)
        async with TestClient(surface) as client:
            response = await client.get("/search?q=frugal")
        assert response.json == {"q": "frugal"}


class TestLifespan:
    @pytest.mark.asyncio
    async def test_startup_and_shutdown_acknowledged(self) -> None:
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict] = []

        async def receive() -> dict:
            return incoming.pop(0)

        async def send(message: dict) -> None:
            sent.append(message)

        await RoutingSurface()({"type": "lifespan"}, receive, send)
        assert sent == [
            {"type": "lifespan.startup.complete"},
            {"type": "lifespan.shutdown.complete"},
        ]
