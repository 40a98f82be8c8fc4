"""Trill CLI — route listing and API docs generation.

Entry point registered as ``trill`` in ``pyproject.toml``::

    [project.scripts]
    trill = "trill.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trill`` command."""
    parser = argparse.ArgumentParser(
        prog="trill",
        description="Trill — a composable HTTP router that documents itself.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trill routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapi:app or myapi:create_app)",
    )

    # -- trill docs -------------------------------------------------------
    docs_parser = subparsers.add_parser("docs", help="Generate a RAML API description")
    docs_parser.add_argument(
        "app",
        help="Import string (e.g. myapi:app or myapi:create_app)",
    )
    docs_parser.add_argument("--title", default="", help="Document title")
    docs_parser.add_argument("--base-uri", default="", help="Base URI of the API")
    docs_parser.add_argument("--version", default="", help="API version")
    docs_parser.add_argument(
        "--media-type",
        default="application/json",
        help="Default media type (default: application/json)",
    )
    docs_parser.add_argument(
        "--protocol",
        action="append",
        default=[],
        help="Supported protocol, e.g. HTTPS (repeatable)",
    )
    docs_parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml)",
    )
    docs_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write to this file instead of stdout",
    )
    docs_parser.add_argument(
        "--source-url-template",
        default="{file}#L{line}",
        help="Source link template with {file} and {line} placeholders",
    )
    docs_parser.add_argument(
        "--substitute",
        action="append",
        default=[],
        metavar="OLD=NEW",
        help="Rewrite the first matching source-link prefix (repeatable)",
    )
    docs_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log each documented route",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from trill.cli._routes import run_routes

        run_routes(args)
    elif args.command == "docs":
        from trill.cli._docs import run_docs

        run_docs(args)
