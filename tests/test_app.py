"""Tests for frugal.app: App setup, freezing and access logging."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from frugal.app import App, configure_logging
from frugal.config import AppConfig
from frugal.errors import ConfigurationError
from frugal.routing.decorators import controller, get, post
from frugal.routing.registry import RouteRegistry
from frugal.testing import TestClient


def _declare(registry: RouteRegistry) -> tuple[type, type]:
    @controller("/users", registry=registry)
    class Users:
        @get("/:id")
        def show(self, request):
            return {"id": request.path_params["id"]}

    @controller("/items", registry=registry)
    class Items:
        @post("/")
        def create(self, request):
            return {"created": True}

    return Users, Items


class TestSetup:
    def test_register_is_chainable(self, registry: RouteRegistry) -> None:
        users, items = _declare(registry)
        app = App(registry=registry)
        assert app.register(users).register(items) is app
        assert [(b.method.value, b.path) for b in app.routes] == [
            ("GET", "/users/:id"),
            ("POST", "/items/"),
        ]

    def test_register_many_at_once(self, registry: RouteRegistry) -> None:
        users, items = _declare(registry)
        app = App(registry=registry).register(users, items)
        assert len(app.routes) == 2

    def test_default_config(self, registry: RouteRegistry) -> None:
        app = App(registry=registry)
        assert app.config == AppConfig()

    @pytest.mark.asyncio
    async def test_register_after_first_request_raises(self, registry: RouteRegistry) -> None:
        users, items = _declare(registry)
        app = App(registry=registry).register(users)
        async with TestClient(app) as client:
            await client.get("/users/1")
        with pytest.raises(ConfigurationError, match="after the app has started"):
            app.register(items)


class TestServing:
    @pytest.mark.asyncio
    async def test_requests_are_dispatched(self, registry: RouteRegistry) -> None:
        users, items = _declare(registry)
        app = App(registry=registry).register(users, items)
        async with TestClient(app) as client:
            show = await client.get("/users/3")
            create = await client.post("/items/")
            missing = await client.get("/nowhere")
        assert (show.status, show.json) == (200, {"id": "3"})
        assert (create.status, create.json) == (201, {"created": True})
        assert missing.status == 404
        assert missing.json == {"error": "Not Found", "status": 404}

    @pytest.mark.asyncio
    async def test_access_log(
        self, registry: RouteRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        users, _ = _declare(registry)
        app = App(registry=registry).register(users)
        with caplog.at_level(logging.INFO, logger="frugal.access"):
            async with TestClient(app) as client:
                await client.get("/users/5")
        records = [r for r in caplog.records if r.name == "frugal.access"]
        assert len(records) == 1
        assert records[0].getMessage().startswith("GET /users/5 200 ")

    @pytest.mark.asyncio
    async def test_access_log_disabled(
        self, registry: RouteRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        users, _ = _declare(registry)
        app = App(AppConfig(access_log=False), registry=registry).register(users)
        with caplog.at_level(logging.INFO, logger="frugal.access"):
            async with TestClient(app) as client:
                await client.get("/users/5")
        assert not [r for r in caplog.records if r.name == "frugal.access"]


class TestRun:
    @patch("frugal.server.dev.run_server")
    def test_run_freezes_registry_and_serves(
        self, mock_server: MagicMock, registry: RouteRegistry
    ) -> None:
        users, _ = _declare(registry)
        app = App(AppConfig(host="0.0.0.0", port=4000), registry=registry).register(users)
        app.run()

        assert registry.frozen
        mock_server.assert_called_once()
        args, kwargs = mock_server.call_args
        assert args == (app, "0.0.0.0", 4000)
        assert kwargs == {"reload": False, "reload_dirs": ()}

    @patch("frugal.server.dev.run_server")
    def test_run_overrides(self, mock_server: MagicMock, registry: RouteRegistry) -> None:
        app = App(registry=registry)
        app.run(host="localhost", port=9000)
        args = mock_server.call_args[0]
        assert args[1:] == ("localhost", 9000)

    @patch("frugal.server.dev.run_server")
    def test_run_reload_follows_debug(
        self, mock_server: MagicMock, registry: RouteRegistry
    ) -> None:
        app = App(AppConfig(debug=True, reload_dirs=("src",)), registry=registry)
        app.run()
        kwargs = mock_server.call_args[1]
        assert kwargs == {"reload": True, "reload_dirs": ("src",)}


class TestConfigureLogging:
    def test_unknown_level(self) -> None:
        with pytest.raises(ConfigurationError, match="loud"):
            configure_logging("loud")
