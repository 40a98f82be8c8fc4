"""``trill docs`` — generate a RAML document for a mux.

Builds a ``DocsConfig`` from the command line, walks the mux with the
developer-docs formatter, and writes YAML or JSON to a file or stdout.
Any failure is reported as a single ``Error:`` line and exit code 1.
"""

import argparse
import logging
import sys
from pathlib import Path

from trill.cli._resolve import resolve_mux
from trill.config import DocsConfig
from trill.docgen import generate
from trill.docgen.links import parse_substitution
from trill.errors import TrillError

logger = logging.getLogger("trill.docgen")


def build_config(args: argparse.Namespace) -> DocsConfig:
    """Translate parsed CLI arguments into a ``DocsConfig``."""
    return DocsConfig(
        title=args.title,
        base_uri=args.base_uri,
        version=args.version,
        media_type=args.media_type,
        protocols=tuple(args.protocol),
        source_url_template=args.source_url_template,
        source_substitutions=tuple(parse_substitution(s) for s in args.substitute),
    )


def run_docs(args: argparse.Namespace) -> None:
    """Generate and write the document, exiting 1 on the first error."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = build_config(args)
        mux = resolve_mux(args.app)
        doc = generate(mux, config)
        output = doc.to_json() + "\n" if args.format == "json" else doc.to_yaml()
        if args.output in (None, "-"):
            sys.stdout.write(output)
        else:
            Path(args.output).write_text(output, encoding="utf-8")
            logger.debug("wrote %s", args.output)
    except (ModuleNotFoundError, AttributeError, TypeError, OSError, TrillError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
