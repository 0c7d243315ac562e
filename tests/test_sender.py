"""Tests for frugal.server.sender response emission rules."""

import pytest

from frugal.http.response import Response, empty_response, json_response
from frugal.server.sender import body_allowed, send_response


async def _collect(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    @pytest.mark.asyncio
    async def test_json_body(self) -> None:
        messages = await _collect(json_response({"a": 1}, 201))
        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 201
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"application/json; charset=utf-8"
        assert headers[b"content-length"] == b"7"
        assert messages[1] == {"type": "http.response.body", "body": b'{"a":1}'}

    @pytest.mark.asyncio
    async def test_204_has_no_body_or_content_type(self) -> None:
        messages = await _collect(empty_response(204))
        headers = dict(messages[0]["headers"])
        assert b"content-type" not in headers
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    @pytest.mark.asyncio
    async def test_204_drops_accidental_body(self) -> None:
        messages = await _collect(Response("unexpected").with_status(204))
        assert messages[1]["body"] == b""

    @pytest.mark.asyncio
    async def test_extra_headers_lowercased(self) -> None:
        messages = await _collect(Response("x").with_header("X-Trace", "1"))
        assert (b"x-trace", b"1") in messages[0]["headers"]


class TestBodyAllowed:
    @pytest.mark.parametrize("status", [100, 101, 204, 304])
    def test_no_body(self, status: int) -> None:
        assert body_allowed(status) is False

    @pytest.mark.parametrize("status", [200, 201, 300, 403, 500])
    def test_body(self, status: int) -> None:
        assert body_allowed(status) is True
