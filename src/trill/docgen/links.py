"""Source links for handlers and middleware.

Turns a ``(file, line)`` pair into a URL pointing at that line. The
template renders first; then the first configured substitution whose
``old`` text occurs in the result rewrites it, once. That is how a
local checkout path becomes a browsable repository URL::

    linker = SourceLinker(
        substitutions=(("/home/me/api/", "https://github.com/me/api/blob/main/"),),
    )
    linker.link("/home/me/api/app.py", 12)
    # "https://github.com/me/api/blob/main/app.py#L12"
"""

from dataclasses import dataclass

from trill.errors import DocgenError


@dataclass(frozen=True, slots=True)
class SourceLinker:
    """Render source URLs from a template plus prefix substitutions."""

    url_template: str = "{file}#L{line}"
    substitutions: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        try:
            self.url_template.format(file="", line=0)
        except (KeyError, IndexError, ValueError) as exc:
            msg = (
                f"Invalid source URL template {self.url_template!r}; "
                f"only {{file}} and {{line}} are available."
            )
            raise DocgenError(msg) from exc

    def link(self, file: str, line: int) -> str:
        """Return the URL for *file* at *line*."""
        url = self.url_template.format(file=file, line=line)
        for old, new in self.substitutions:
            if old and old in url:
                return url.replace(old, new, 1)
        return url


def parse_substitution(spec: str) -> tuple[str, str]:
    """Parse an ``OLD=NEW`` command-line substitution.

    Raises ``DocgenError`` when there is no ``=`` or OLD is empty.
    """
    old, sep, new = spec.partition("=")
    if not sep or not old:
        msg = f"Invalid substitution {spec!r}; expected OLD=NEW."
        raise DocgenError(msg)
    return old, new
