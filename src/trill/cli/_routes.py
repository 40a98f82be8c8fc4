"""``trill routes`` — list registered routes.

Resolves an import string to a Mux and prints every walked route with
method, path, and handler info.
"""

import argparse
import sys

from trill.cli._resolve import resolve_mux
from trill.errors import TrillError
from trill.introspect import get_func_info


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / HANDLER table for a mux, in walk order."""
    try:
        mux = resolve_mux(args.app)
        routes = mux.routes()
    except (ModuleNotFoundError, AttributeError, TypeError, TrillError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not routes:
        print("No routes registered.")
        return

    # Build rows: (method, path, handler_name)
    rows: list[tuple[str, str, str]] = []
    for route in routes:
        info = get_func_info(route.handler)
        rows.append((route.method, route.path, f"{info.pkg}.{info.func}"))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
