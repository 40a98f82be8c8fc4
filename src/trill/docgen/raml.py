"""RAML document model and the route-walk aggregator.

A ``RAML`` document holds root metadata plus a flat ``path -> method ->
Resource`` map. ``add()`` is the single mutation primitive;
``add_resources_from_walk()`` drives a mux walk through a formatter
and feeds the results to ``add()``.

Serialization follows RAML 1.0 field names: resources appear as
top-level ``"/path"`` keys, methods are lower-cased, and empty fields
are omitted.
"""

from __future__ import annotations

import json as json_module
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

import yaml

from trill.routing.route import WalkedRoute

logger = logging.getLogger("trill.docgen")

RAML_HEADER = "#%RAML 1.0\n---\n"

# (method, path, handler, middleware) -> Resource | None
type FormatFn = Callable[[str, str, Callable[..., Any], tuple[Callable[..., Any], ...]], Resource | None]


@dataclass(frozen=True, slots=True)
class Documentation:
    """A free-form documentation section at the document root."""

    title: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "content": self.content}


@dataclass(frozen=True, slots=True)
class Example:
    """One example payload for a media type."""

    example: str

    def to_dict(self) -> dict[str, Any]:
        return {"example": self.example}


def _body_dict(body: dict[str, Example]) -> dict[str, Any]:
    return {media_type: example.to_dict() for media_type, example in body.items()}


@dataclass(slots=True)
class Response:
    """An expected response. Empty is a valid placeholder."""

    description: str = ""
    body: dict[str, Example] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.description:
            data["description"] = self.description
        if self.body:
            data["body"] = _body_dict(self.body)
        return data


@dataclass(slots=True)
class Resource:
    """Documentation for one (path, method) pair."""

    description: str = ""
    responses: dict[int, Response] = field(default_factory=dict)
    display_name: str = ""
    body: dict[str, Example] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.display_name:
            data["displayName"] = self.display_name
        if self.description:
            data["description"] = self.description
        if self.body:
            data["body"] = _body_dict(self.body)
        if self.responses:
            data["responses"] = {
                status: response.to_dict() for status, response in self.responses.items()
            }
        return data


def _iter_routes(routes: Any) -> Iterator[WalkedRoute]:
    walk = getattr(routes, "walk", None)
    if callable(walk):
        return iter(walk())
    return iter(routes)


@dataclass(slots=True)
class RAML:
    """A RAML-like API description document.

    Usage::

        doc = RAML(title="Articles", base_uri="https://api.example.com", version="v1")
        doc.add_resources_from_walk(mux, developer_docs)
        print(doc.to_yaml())
    """

    title: str = ""
    base_uri: str = ""
    version: str = ""
    media_type: str = ""
    protocols: list[str] = field(default_factory=list)
    documentation: list[Documentation] = field(default_factory=list)
    resources: dict[str, dict[str, Resource]] = field(default_factory=dict)

    # -- Mutation --

    def add(self, method: str, path: str, resource: Resource) -> None:
        """Insert *resource* at (path, method), replacing any existing entry.

        The path node is created on first use. Never raises.
        """
        self.resources.setdefault(path, {})[method.upper()] = resource

    def add_resources_from_walk(
        self,
        routes: Any,
        fmt: FormatFn | None = None,
    ) -> None:
        """Run *fmt* over every walked route and insert the results.

        *routes* is a ``Mux``, anything with a ``walk()`` method, or an
        iterable of ``WalkedRoute``. *fmt* defaults to ``developer_docs``.

        Exceptions from the walk or from *fmt* propagate unchanged and
        stop the walk; routes already inserted stay in the document.
        A ``None`` result leaves the route undocumented.
        """
        if fmt is None:
            from trill.docgen.format import developer_docs

            fmt = developer_docs

        for route in _iter_routes(routes):
            resource = fmt(route.method, route.path, route.handler, route.middleware)
            if resource is None:
                logger.debug("skipped %s %s", route.method, route.path)
                continue
            self.add(route.method, route.path, resource)
            logger.debug("documented %s %s", route.method, route.path)

    # -- Lookup --

    def get(self, path: str, method: str) -> Resource | None:
        """Return the Resource at (path, method), or None."""
        return self.resources.get(path, {}).get(method.upper())

    # -- Serialization --

    def to_dict(self) -> dict[str, Any]:
        """Return the document as plain data, RAML field names, empties omitted."""
        data: dict[str, Any] = {}
        if self.title:
            data["title"] = self.title
        if self.base_uri:
            data["baseUri"] = self.base_uri
        if self.version:
            data["version"] = self.version
        if self.media_type:
            data["mediaType"] = self.media_type
        if self.protocols:
            data["protocols"] = list(self.protocols)
        if self.documentation:
            data["documentation"] = [doc.to_dict() for doc in self.documentation]
        for path, methods in self.resources.items():
            data[path] = {method.lower(): resource.to_dict() for method, resource in methods.items()}
        return data

    def to_yaml(self) -> str:
        """Serialize as a RAML 1.0 YAML document."""
        body = yaml.safe_dump(
            self.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        return RAML_HEADER + body

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize the same mapping as JSON."""
        return json_module.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
