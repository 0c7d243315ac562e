"""Tests for frugal.http.writer: the response-intent capability."""

import pytest

from frugal.errors import ResponseAlreadySent
from frugal.http.response import Response
from frugal.http.writer import ResponseWriter


class TestCommitted:
    def test_starts_uncommitted(self) -> None:
        writer = ResponseWriter()
        assert writer.committed is False
        assert writer.response is None

    def test_json_commits(self) -> None:
        writer = ResponseWriter()
        writer.json({"ok": True}, 202)
        assert writer.committed
        assert writer.response is not None
        assert writer.response.status == 202
        assert writer.response.json == {"ok": True}

    def test_empty_commits(self) -> None:
        writer = ResponseWriter()
        writer.empty()
        assert writer.response is not None
        assert writer.response.status == 204

    def test_send_raw(self) -> None:
        writer = ResponseWriter()
        writer.send("hi", status=418, content_type="text/plain")
        assert writer.response == Response(body="hi", status=418, content_type="text/plain")

    def test_second_write_raises(self) -> None:
        writer = ResponseWriter()
        writer.json({})
        with pytest.raises(ResponseAlreadySent):
            writer.empty()

    def test_failed_serialisation_does_not_commit(self) -> None:
        writer = ResponseWriter()
        with pytest.raises(TypeError):
            writer.json(object())
        assert writer.committed is False


class TestHeaders:
    def test_headers_applied_to_committed_response(self) -> None:
        writer = ResponseWriter()
        writer.header("X-Request-Id", "abc").json({})
        assert writer.response is not None
        assert writer.response.header("x-request-id") == "abc"

    def test_reset(self) -> None:
        writer = ResponseWriter()
        writer.header("X-One", "1")
        writer.json({})
        writer.reset()
        assert writer.committed is False
        writer.empty()
        assert writer.response is not None
        assert writer.response.headers == ()
