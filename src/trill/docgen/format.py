"""Default formatter: developer docs derived from route metadata alone.

For every route the formatter reads the handler's docstring (or the
comment above it) and renders:

- the first sentence as an ``<h3>`` heading, the rest as body text;
  a handler with no comment gets neither, not an empty ``<h3></h3>``
- an "HTTP Request" section drawing the middleware call chain as
  nested, linked enter/exit lines around the handler
- one expected response per method (POST 201, GET/PUT 200, DELETE 204)

Wildcard routes registered with ``Mux.handle`` are left out.
"""

from collections.abc import Callable, Sequence
from typing import Any

from trill.config import DocsConfig
from trill.docgen.links import SourceLinker
from trill.docgen.raml import FormatFn, Resource, Response
from trill.introspect import FuncInfo, get_func_info

HTTP_REQUEST_HEADER = "\n\n---\n\n⇩ HTTP Request<br />\n"


def split_comment(comment: str) -> tuple[str, str]:
    """Split *comment* after its first period.

    ``"Short summary. Longer body text."`` gives
    ``("Short summary.", " Longer body text.")``. Without a period the
    whole comment is the heading.
    """
    heading, sep, body = comment.partition(".")
    return heading + sep, body


def _indent(level: int) -> str:
    return "&nbsp;" * (2 * level)


def _ref(info: FuncInfo, linker: SourceLinker) -> str:
    return f"[{info.short_pkg}.**{info.func}**]({linker.link(info.file, info.line)})"


def chain_diagram(
    handler: FuncInfo,
    middleware: Sequence[FuncInfo],
    linker: SourceLinker,
) -> str:
    """Draw the call chain: enter each middleware, the handler, unwind."""
    depth = len(middleware)
    lines: list[str] = []
    for i, mw in enumerate(middleware):
        lines.append(f"{_indent(i + 1)}↳ {_ref(mw, linker)}<br />\n")
    lines.append(f"{_indent(depth + 1)}↳<br />\n")
    lines.append(f"{_indent(depth + 2)}{_ref(handler, linker)}<br />\n")
    lines.append(f"{_indent(depth + 1)}↵<br />\n")
    for i, mw in reversed(list(enumerate(middleware))):
        lines.append(f"{_indent(i + 1)}↵ {_ref(mw, linker)}<br />\n")
    return "".join(lines)


def make_developer_docs(config: DocsConfig | None = None) -> FormatFn:
    """Return a developer-docs formatter bound to *config*."""
    cfg = config or DocsConfig()
    linker = cfg.linker()

    def developer_docs(
        method: str,
        path: str,
        handler: Callable[..., Any],
        middleware: Sequence[Callable[..., Any]] = (),
    ) -> Resource | None:
        if method == cfg.wildcard_method:
            return None

        info = get_func_info(handler)
        heading, body = split_comment(info.comment)

        desc = ""
        if heading:
            desc += f"<h3>{heading}</h3>\n"
        if body:
            desc += f"{body}\n"

        desc += HTTP_REQUEST_HEADER

        if middleware:
            desc += chain_diagram(info, [get_func_info(mw) for mw in middleware], linker)
        else:
            desc += cfg.empty_chain_text

        resource = Resource(description=desc)
        status = cfg.default_responses.get(method.upper())
        if status is not None:
            resource.responses[status] = Response()
        return resource

    return developer_docs


developer_docs = make_developer_docs()
