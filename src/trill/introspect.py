"""Handler and middleware introspection.

``get_func_info()`` answers "where does this callable come from and
what does it say about itself": declaring module, function name,
source file and line, and its documentation comment. The docs
generator uses it for every handler and middleware on a route.

Runtime introspection can't always answer (builtins, C extensions,
dynamically generated callables). ``describe()`` attaches the same
metadata explicitly at registration time and always wins::

    r.get("/ping", describe("Liveness probe. Always answers pong.")(lambda req: "pong"))
"""

import dataclasses
import functools
import inspect
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

DESCRIBE_ATTR = "__trill_describe__"


@dataclass(frozen=True, slots=True)
class FuncInfo:
    """Identity of a handler or middleware.

    ``pkg`` is the dotted module path (``examples.raml.app``), ``func``
    the qualified name with ``<locals>`` dropped (``admin_router.index``).
    ``anonymous`` marks lambdas; ``unresolvable`` marks callables with
    no Python source, for which ``file`` is empty and ``line`` is 0.
    """

    pkg: str = ""
    func: str = ""
    file: str = ""
    line: int = 0
    comment: str = ""
    anonymous: bool = False
    unresolvable: bool = False

    @property
    def short_pkg(self) -> str:
        """Last dotted segment of ``pkg``."""
        return self.pkg.rsplit(".", 1)[-1]


def describe(
    comment: str | None = None,
    *,
    pkg: str | None = None,
    func: str | None = None,
) -> Callable[[F], F]:
    """Attach explicit docs metadata to a handler or middleware.

    Fields left as ``None`` keep their introspected values. Works as a
    decorator or as a plain call around a lambda. The target is never
    modified: each call returns a new wrapper, so one function can be
    registered on several routes with different descriptions.
    """
    overrides = {
        key: value
        for key, value in (("comment", comment), ("pkg", pkg), ("func", func))
        if value is not None
    }

    def decorator(target: F) -> F:
        @functools.wraps(target)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return target(*args, **kwargs)

        if inspect.iscoroutinefunction(target):
            inspect.markcoroutinefunction(wrapper)
        setattr(wrapper, DESCRIBE_ATTR, overrides)
        return wrapper  # type: ignore[return-value]

    return decorator


def _overrides(obj: Any) -> dict[str, str]:
    """Nearest ``describe()`` overrides along the ``__wrapped__`` chain."""
    seen: set[int] = set()
    while obj is not None and id(obj) not in seen:
        seen.add(id(obj))
        found = vars(obj).get(DESCRIBE_ATTR) if hasattr(obj, "__dict__") else None
        if found:
            return found
        obj = getattr(obj, "__wrapped__", None)
    return {}


def _resolve_target(obj: Any) -> Any:
    """Find the object that actually carries source and docs."""
    obj = inspect.unwrap(obj)
    while isinstance(obj, functools.partial):
        obj = inspect.unwrap(obj.func)
    if inspect.ismethod(obj):
        obj = obj.__func__
    if not (inspect.isfunction(obj) or inspect.isclass(obj) or inspect.isbuiltin(obj)):
        # Callable instances are documented by their class
        obj = type(obj)
    return obj


def _func_name(obj: Any) -> str:
    qualname = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    if qualname is None:
        return type(obj).__name__
    return qualname.replace(".<locals>", "")


def _is_generated_doc(obj: Any, doc: str) -> bool:
    """True for the signature docstring ``dataclasses`` writes on undocumented classes."""
    if not (inspect.isclass(obj) and dataclasses.is_dataclass(obj)):
        return False
    try:
        if doc == obj.__name__ + str(inspect.signature(obj)).replace(" -> None", ""):
            return True
    except (TypeError, ValueError):
        pass
    # Annotations may render differently than when the class was built
    return doc.startswith(f"{obj.__name__}(") and doc.endswith(")") and "\n" not in doc


def _comment(obj: Any) -> str:
    """Docstring first, then ``#`` comments directly above the definition."""
    doc = getattr(obj, "__doc__", None)
    if isinstance(doc, str) and doc.strip() and not _is_generated_doc(obj, doc):
        return inspect.cleandoc(doc)
    try:
        comments = inspect.getcomments(obj)
    except (OSError, TypeError):
        return ""
    if not comments:
        return ""
    lines = [line.strip().removeprefix("#").removeprefix(" ") for line in comments.splitlines()]
    return "\n".join(lines).strip()


def _source_location(obj: Any) -> tuple[str, int] | None:
    try:
        file = inspect.getsourcefile(obj) or inspect.getfile(obj)
    except TypeError:
        return None
    try:
        _, line = inspect.getsourcelines(obj)
    except (OSError, TypeError):
        code = getattr(obj, "__code__", None)
        line = code.co_firstlineno if code is not None else 0
    return file, line


def get_func_info(obj: Any) -> FuncInfo:
    """Introspect a handler or middleware into a ``FuncInfo``."""
    overrides = _overrides(obj)
    target = _resolve_target(obj)

    location = _source_location(target)
    name = getattr(target, "__name__", "")
    info = FuncInfo(
        pkg=getattr(target, "__module__", None) or "",
        func=_func_name(target),
        file=location[0] if location else "",
        line=location[1] if location else 0,
        comment=_comment(target),
        anonymous=name == "<lambda>",
        unresolvable=location is None,
    )
    if overrides:
        info = replace(info, **overrides)
    return info
