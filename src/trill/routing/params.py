"""Path parameter converters.

A converter only constrains what a segment may match. Captured values
always reach handlers as strings via ``request.param(name)``.
"""

import re

from trill.errors import ConfigurationError

# converter name -> segment regex
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


def segment_regex(param_type: str, route_path: str = "") -> re.Pattern[str]:
    """Return the anchored regex a *param_type* segment must match.

    Raises ``ConfigurationError`` for an unknown converter.
    """
    try:
        pattern = CONVERTERS[param_type]
    except KeyError:
        where = f" in route {route_path!r}" if route_path else ""
        msg = f"Unknown path converter {param_type!r}{where}."
        raise ConfigurationError(msg) from None
    return re.compile(f"^{pattern}$")
