"""Read-only query string parameters."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Parsed query string. Indexing returns the first value for a key.

    ``str(params)`` gives back the raw query string::

        params = QueryParams("page=2&tag=a&tag=b")
        params["tag"]             # "a"
        params.get_list("tag")    # ["a", "b"]
        params.get_int("page")    # 2
    """

    __slots__ = ("_raw", "_values")

    def __init__(self, query_string: str = "") -> None:
        values: dict[str, list[str]] = {}
        for key, value in parse_qsl(query_string, keep_blank_values=True):
            values.setdefault(key, []).append(value)
        self._raw = query_string
        self._values = values

    def __getitem__(self, key: str) -> str:
        return self._values[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*."""
        return list(self._values.get(key, ()))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return the first value as an int, or *default* if missing or not numeric."""
        try:
            return int(self[key])
        except (KeyError, ValueError):
            return default
