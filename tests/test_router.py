"""Tests for trill.routing.router — compiled trie-based router."""

import pytest

from trill.errors import ConfigurationError, MethodNotAllowed, NotFound
from trill.routing.route import Route
from trill.routing.router import Router, parse_path


def _handler() -> str:
    return "ok"


def _route(path: str, methods: frozenset[str] | None = None) -> Route:
    return Route(path=path, handler=_handler, methods=methods or frozenset({"GET"}))


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_colon_param(self) -> None:
        segments = parse_path("/articles/:article_id")
        assert segments[1].is_param is True
        assert segments[1].param_name == "article_id"

    def test_typed_param(self) -> None:
        segments = parse_path("/users/{id:int}")
        assert segments[1].param_type == "int"

    def test_star_is_catch_all(self) -> None:
        segments = parse_path("/static/*")
        assert segments[1].param_type == "path"
        assert segments[1].param_name == "*"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "/share/<slug>" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="uuid"):
            parse_path("/users/{id:uuid}")


class TestRouterMatching:
    def test_root(self) -> None:
        r = Router()
        r.add(_route("/"))
        r.compile()

        assert r.match("GET", "/").path_params == {}

    def test_trailing_slash_ignored(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        assert r.match("GET", "/users/").route.path == "/users"

    def test_colon_param(self) -> None:
        r = Router()
        r.add(_route("/articles/:article_id"))
        r.compile()

        assert r.match("GET", "/articles/12").path_params == {"article_id": "12"}

    def test_static_beats_param(self) -> None:
        r = Router()
        r.add(_route("/articles/:article_id"))
        r.add(_route("/articles/search"))
        r.compile()

        assert r.match("GET", "/articles/search").route.path == "/articles/search"

    def test_int_param_rejects_non_digit(self) -> None:
        r = Router()
        r.add(_route("/users/{id:int}"))
        r.compile()

        with pytest.raises(NotFound):
            r.match("GET", "/users/abc")

    def test_catch_all(self) -> None:
        r = Router()
        r.add(_route("/static/*"))
        r.compile()

        assert r.match("GET", "/static/css/site.css").path_params == {"*": "css/site.css"}

    def test_not_found(self) -> None:
        r = Router()
        r.add(_route("/users"))
        r.compile()

        with pytest.raises(NotFound):
            r.match("GET", "/posts")

    def test_method_not_allowed(self) -> None:
        r = Router()
        r.add(_route("/users", frozenset({"GET", "POST"})))
        r.compile()

        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("DELETE", "/users")
        assert exc_info.value.headers == (("Allow", "GET, POST"),)

    def test_wildcard_method_fallback(self) -> None:
        r = Router()
        r.add(_route("/hook", frozenset({"*"})))
        r.compile()

        assert r.match("PATCH", "/hook").route.path == "/hook"

    def test_exact_method_beats_wildcard(self) -> None:
        exact = Route(path="/hook", handler=lambda: "exact", methods=frozenset({"GET"}))
        r = Router()
        r.add(_route("/hook", frozenset({"*"})))
        r.add(exact)
        r.compile()

        assert r.match("GET", "/hook").route is exact

    def test_add_after_compile(self) -> None:
        r = Router()
        r.compile()

        with pytest.raises(RuntimeError):
            r.add(_route("/late"))

    def test_typed_param_tried_before_later_param(self) -> None:
        by_id = Route(path="/items/{id:int}", handler=lambda: "id", methods=frozenset({"GET"}))
        by_slug = Route(path="/items/:slug", handler=lambda: "slug", methods=frozenset({"GET"}))
        r = Router()
        r.add(by_id)
        r.add(by_slug)
        r.compile()

        assert r.match("GET", "/items/7").route is by_id
        assert r.match("GET", "/items/seven").path_params == {"slug": "seven"}

    def test_duplicate_registration_replaces(self) -> None:
        later = Route(path="/users", handler=lambda: "later", methods=frozenset({"GET"}))
        r = Router()
        r.add(_route("/users"))
        r.add(later)
        r.compile()

        assert r.match("GET", "/users").route is later
