"""Tests for trill.server.negotiation — return value to Response."""

import pytest

from trill.http.response import Response
from trill.server.negotiation import negotiate


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        original = Response(body="x", status=418)
        assert negotiate(original) is original

    def test_str(self) -> None:
        response = negotiate("hello")
        assert response.status == 200
        assert response.text == "hello"
        assert response.content_type == "text/plain; charset=utf-8"

    def test_bytes(self) -> None:
        response = negotiate(b"\x00\x01")
        assert response.content_type == "application/octet-stream"

    def test_dict_is_json(self) -> None:
        response = negotiate({"id": "1"})
        assert response.json == {"id": "1"}
        assert response.content_type == "application/json; charset=utf-8"

    def test_list_is_json(self) -> None:
        assert negotiate([1, 2]).json == [1, 2]

    def test_none_is_no_content(self) -> None:
        response = negotiate(None)
        assert response.status == 204
        assert response.body == ""

    def test_status_tuple(self) -> None:
        response = negotiate(({"id": "3"}, 201))
        assert response.status == 201
        assert response.json == {"id": "3"}

    def test_status_headers_tuple(self) -> None:
        response = negotiate(("moved", 301, {"Location": "/new"}))
        assert response.status == 301
        assert response.header("location") == "/new"

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="Cannot convert"):
            negotiate(object())
