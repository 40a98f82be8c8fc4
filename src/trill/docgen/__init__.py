"""Docgen — API description documents built from a mux walk.

Usage::

    from trill.docgen import RAML, developer_docs

    doc = RAML(title="Articles", base_uri="https://api.example.com", version="v1")
    doc.add_resources_from_walk(mux, developer_docs)
    Path("api.raml").write_text(doc.to_yaml())

Or, configured in one step::

    doc = generate(mux, DocsConfig(title="Articles", version="v1"))
"""

from trill.config import DocsConfig
from trill.docgen.format import developer_docs, make_developer_docs, split_comment
from trill.docgen.links import SourceLinker
from trill.docgen.raml import RAML, Documentation, Example, FormatFn, Resource, Response


def generate(routes: object, config: DocsConfig | None = None) -> RAML:
    """Build a document for *routes* with the developer-docs formatter."""
    cfg = config or DocsConfig()
    doc = cfg.new_document()
    doc.add_resources_from_walk(routes, make_developer_docs(cfg))
    return doc


__all__ = [
    "RAML",
    "Documentation",
    "Example",
    "FormatFn",
    "Resource",
    "Response",
    "SourceLinker",
    "developer_docs",
    "generate",
    "make_developer_docs",
    "split_comment",
]
