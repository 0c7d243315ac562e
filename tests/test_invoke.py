"""Tests for frugal._internal.invoke: sync/async calls and writer passing."""

import functools

import pytest

from frugal._internal.invoke import WriterArg, invoke, writer_arg
from frugal.errors import ConfigurationError


class TestInvoke:
    @pytest.mark.asyncio
    async def test_sync(self) -> None:
        assert await invoke(lambda x: x + 1, 1) == 2

    @pytest.mark.asyncio
    async def test_async(self) -> None:
        async def double(x: int) -> int:
            return x * 2

        assert await invoke(double, 4) == 8

    @pytest.mark.asyncio
    async def test_kwargs(self) -> None:
        assert await invoke(lambda *, response: response, response="w") == "w"


class _Controller:
    def request_only(self, request):
        return None

    def positional(self, request, response):
        return None

    async def keyword(self, request, *, response):
        return None

    def varargs(self, *args):
        return None

    def other_keyword(self, request, *, verbose=False):
        return None

    def no_request(self):
        return None

    def keyword_without_request(self, *, response):
        return None


class TestWriterArg:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("request_only", WriterArg.NONE),
            ("positional", WriterArg.POSITIONAL),
            ("keyword", WriterArg.KEYWORD),
            ("varargs", WriterArg.POSITIONAL),
            ("other_keyword", WriterArg.NONE),
        ],
    )
    def test_bound_methods(self, name: str, expected: WriterArg) -> None:
        assert writer_arg(getattr(_Controller(), name)) is expected

    @pytest.mark.parametrize("name", ["no_request", "keyword_without_request"])
    def test_handler_must_take_request(self, name: str) -> None:
        with pytest.raises(ConfigurationError, match="must accept the request"):
            writer_arg(getattr(_Controller(), name))

    def test_partial(self) -> None:
        def handler(prefix, request, response):
            return None

        assert writer_arg(functools.partial(handler, "x")) is WriterArg.POSITIONAL

    def test_unreadable_signature(self) -> None:
        class Opaque:
            @property
            def __signature__(self):
                raise ValueError("no signature")

            def __call__(self, request):
                return None

        assert writer_arg(Opaque()) is WriterArg.NONE
