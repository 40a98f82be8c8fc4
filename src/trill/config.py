"""Documentation generator configuration.

Everything ``trill docs`` can vary lives on ``DocsConfig``: document
metadata, formatter behavior, and how source links are rendered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trill.docgen.links import SourceLinker
    from trill.docgen.raml import RAML

DEFAULT_RESPONSES: Mapping[str, int] = MappingProxyType(
    {
        "POST": 201,
        "GET": 200,
        "PUT": 200,
        "DELETE": 204,
    }
)


@dataclass(frozen=True, slots=True)
class DocsConfig:
    """Docs generation configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DocsConfig(
            title="Articles API",
            base_uri="https://api.example.com",
            source_substitutions=(
                ("/home/me/articles/", "https://github.com/me/articles/blob/main/"),
            ),
        )
    """

    # Document metadata
    title: str = ""
    base_uri: str = ""
    version: str = ""
    media_type: str = "application/json"
    protocols: tuple[str, ...] = ()

    # Routes registered for this method (Mux.handle) are left undocumented
    wildcard_method: str = "*"

    # Shown instead of the call-chain diagram when a route has no middleware
    empty_chain_text: str = "No middleware."

    # Expected status code per method; methods not listed get no response
    default_responses: Mapping[str, int] = field(default_factory=lambda: DEFAULT_RESPONSES)

    # Source links: "{file}" and "{line}" are substituted, then the first
    # matching (old, new) pair rewrites the result once
    source_url_template: str = "{file}#L{line}"
    source_substitutions: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        # Method lookups are upper-case
        normalized = {method.upper(): status for method, status in self.default_responses.items()}
        object.__setattr__(self, "default_responses", MappingProxyType(normalized))

    def linker(self) -> SourceLinker:
        """Return a ``SourceLinker`` for this configuration."""
        from trill.docgen.links import SourceLinker

        return SourceLinker(
            url_template=self.source_url_template,
            substitutions=self.source_substitutions,
        )

    def new_document(self) -> RAML:
        """Return an empty ``RAML`` document carrying this metadata."""
        from trill.docgen.raml import RAML

        return RAML(
            title=self.title,
            base_uri=self.base_uri,
            version=self.version,
            media_type=self.media_type,
            protocols=list(self.protocols),
        )
