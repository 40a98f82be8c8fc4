"""Tests for the RAML example — REST dispatch and generated docs."""

import pytest
import yaml

from trill.config import DocsConfig
from trill.docgen import RAML, developer_docs, generate
from trill.testing import TestClient


class TestWalk:
    """The walk sees every route, in registration order."""

    def test_routes_in_registration_order(self, example_app) -> None:
        walked = [(r.method, r.path) for r in example_app.walk()]
        assert walked == [
            ("GET", "/"),
            ("GET", "/ping"),
            ("GET", "/panic"),
            ("GET", "/articles"),
            ("POST", "/articles"),
            ("GET", "/articles/search"),
            ("GET", "/articles/:article_id"),
            ("PUT", "/articles/:article_id"),
            ("DELETE", "/articles/:article_id"),
            ("GET", "/admin"),
            ("GET", "/admin/accounts"),
            ("GET", "/admin/users/:user_id"),
        ]

    def test_inline_middleware_is_innermost(self, example_module, example_app) -> None:
        route = next(r for r in example_app.walk() if r.path == "/articles" and r.method == "GET")
        assert route.middleware[-1] is example_module.paginate
        assert len(route.middleware) == 5

    def test_sub_router_middleware_is_inherited(self, example_module, example_app) -> None:
        route = next(r for r in example_app.walk() if r.path == "/articles/:article_id")
        assert route.middleware[-1] is example_module.article_ctx

    def test_mounted_router_middleware(self, example_module, example_app) -> None:
        route = next(r for r in example_app.walk() if r.path == "/admin/accounts")
        assert route.middleware[-1] is example_module.admin_only


class TestDocs:
    """The developer-docs formatter over the whole example."""

    def test_every_route_documented(self, example_app) -> None:
        doc = RAML(title="Big Mux", base_uri="https://bigmux.example.com", version="v1.0")
        doc.add_resources_from_walk(example_app, developer_docs)
        assert set(doc.resources) == {
            "/",
            "/ping",
            "/panic",
            "/articles",
            "/articles/search",
            "/articles/:article_id",
            "/admin",
            "/admin/accounts",
            "/admin/users/:user_id",
        }
        assert set(doc.resources["/articles/:article_id"]) == {"GET", "PUT", "DELETE"}

    def test_default_responses(self, example_app) -> None:
        doc = generate(example_app)
        assert list(doc.get("/articles", "POST").responses) == [201]
        assert list(doc.get("/articles", "GET").responses) == [200]
        assert list(doc.get("/articles/:article_id", "PUT").responses) == [200]
        assert list(doc.get("/articles/:article_id", "DELETE").responses) == [204]

    def test_description_from_docstring(self, example_app) -> None:
        doc = generate(example_app)
        desc = doc.get("/articles", "GET").description
        assert desc.startswith("<h3>ListArticles returns an array of Articles.</h3>\n")
        assert "[example_raml.**paginate**]" in desc
        assert "[builtin.**request_id**]" in desc

    def test_describe_overrides_lambda(self, example_app) -> None:
        doc = generate(example_app)
        assert doc.get("/admin", "GET").description.startswith("<h3>Admin index.</h3>\n")

    def test_yaml_output_parses(self, example_app) -> None:
        doc = generate(example_app, DocsConfig(title="Big Mux", version="v1.0"))
        text = doc.to_yaml()
        assert text.startswith("#%RAML 1.0\n---\n")
        data = yaml.safe_load(text)
        assert data["title"] == "Big Mux"
        assert data["mediaType"] == "application/json"
        assert data["/articles"]["post"]["responses"] == {201: {}}


@pytest.mark.anyio
class TestArticles:
    """Serving the articles resource."""

    async def test_root_and_ping(self, example_app) -> None:
        async with TestClient(example_app) as client:
            assert (await client.get("/")).text == "root."
            assert (await client.get("/ping")).text == "pong"

    async def test_request_id_header(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/ping", headers={"X-Request-Id": "abc"})
            assert response.header("X-Request-Id") == "abc"

    async def test_panic_recovered(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/panic")
            assert response.status == 500

    async def test_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/articles")
            assert response.status == 200
            assert response.json == [{"id": "1", "title": "Hi"}, {"id": "2", "title": "sup"}]

    async def test_list_paginated(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/articles?page=2&limit=1")
            assert response.json == [{"id": "2", "title": "sup"}]

    async def test_search(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/articles/search?q=SU")
            assert response.json == [{"id": "2", "title": "sup"}]

    async def test_create_then_get(self, example_app) -> None:
        async with TestClient(example_app) as client:
            created = await client.post("/articles", json={"id": "99", "title": "New"})
            assert created.status == 201
            assert created.json == {"id": "3", "title": "New"}

            fetched = await client.get("/articles/3")
            assert fetched.json == {"id": "3", "title": "New"}

    async def test_create_requires_title(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/articles", json={})
            assert response.status == 422

    async def test_update(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.put("/articles/1", json={"title": "Hello"})
            assert response.json == {"id": "1", "title": "Hello"}
            assert (await client.get("/articles/1")).json["title"] == "Hello"

    async def test_delete(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.delete("/articles/2")
            assert response.status == 204
            assert (await client.get("/articles/2")).status == 404

    async def test_missing_article(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/articles/404")
            assert response.status == 404
            assert response.json == {"error": "Not Found"}

    async def test_method_not_allowed(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.delete("/ping")
            assert response.status == 405
            assert response.header("Allow") == "GET"

    async def test_stores_are_isolated(self, example_module) -> None:
        first = example_module.create_app()
        second = example_module.create_app()
        async with TestClient(first) as client:
            await client.delete("/articles/1")
        async with TestClient(second) as client:
            assert (await client.get("/articles/1")).status == 200


@pytest.mark.anyio
class TestAdmin:
    async def test_forbidden_without_acl(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/admin/accounts")
            assert response.status == 403

    async def test_admin_user(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/admin/users/7", headers={"X-ACL-Admin": "true"})
            assert response.text == "admin: view user id 7"
