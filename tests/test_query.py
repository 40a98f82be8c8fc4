"""Tests for trill.http.query — immutable QueryParams."""

import pytest

from trill.http.query import QueryParams


class TestQueryParams:
    def test_getitem(self) -> None:
        q = QueryParams("q=hello&page=2")
        assert q["q"] == "hello"
        assert q["page"] == "2"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            QueryParams("q=hello")["missing"]

    def test_first_value_returned(self) -> None:
        q = QueryParams("x=first&x=second")
        assert q["x"] == "first"
        assert q.get_list("x") == ["first", "second"]

    def test_get_with_default(self) -> None:
        q = QueryParams("q=hello")
        assert q.get("missing") is None
        assert q.get("missing", "fallback") == "fallback"

    def test_get_int(self) -> None:
        q = QueryParams("page=3&limit=abc")
        assert q.get_int("page") == 3
        assert q.get_int("limit") is None
        assert q.get_int("limit", 20) == 20
        assert q.get_int("missing", 1) == 1

    def test_blank_value_preserved(self) -> None:
        assert QueryParams("flag=")["flag"] == ""

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert list(q) == []

    def test_str_is_raw_query(self) -> None:
        assert str(QueryParams("page=2&tag=a")) == "page=2&tag=a"
