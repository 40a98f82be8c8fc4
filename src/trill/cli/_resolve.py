"""Mux import resolution — resolves ``"module:attribute"`` strings to Mux instances.

Shared utility used by ``trill routes`` and ``trill docs`` to locate a
mux from a user-supplied import string.
"""

import importlib
import os
import sys

from trill.routing.mux import Mux


def resolve_mux(import_string: str) -> Mux:
    """Resolve an import string to a trill Mux instance.

    ``"myapi:app"`` names the attribute; plain ``"myapi"`` means
    ``myapi.app``. A callable that is not a Mux is treated as a factory
    and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``Mux`` or a factory
            returning one.
    """
    # The CLI entry point does not put the working directory on sys.path
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Mux):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Mux):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a trill.Mux instance"
        raise TypeError(msg)

    return obj
