"""Tag filters given on the command line and per-tag colour styles."""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .errors import TagParseError

COLOURS: Tuple[str, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright black",
    "bright red",
    "bright green",
    "bright yellow",
    "bright blue",
    "bright magenta",
    "bright cyan",
    "bright white",
)

DEFAULT_FG = "green"


@dataclass(frozen=True)
class FilterTag:
    """``+tag`` keeps tasks carrying the tag, ``/tag`` keeps tasks without it."""

    name: str
    negated: bool = False

    @classmethod
    def parse(cls, token: str) -> "FilterTag":
        if token.startswith("+"):
            return cls(token[1:])
        if token.startswith("/"):
            return cls(token[1:], negated=True)
        raise TagParseError(f"filter tag must start with + or /: {token!r}")

    def matches(self, tags: Iterable[str]) -> bool:
        if self.negated:
            return all(t != self.name for t in tags)
        return any(t == self.name for t in tags)

    def __str__(self) -> str:
        return ("/" if self.negated else "+") + self.name


def parse_add_tag(token: str) -> str:
    if not token.startswith("+"):
        raise TagParseError(f"tag must start with +: {token!r}")
    return token[1:]


def matches_all(filters: Iterable[FilterTag], tags: Iterable[str]) -> bool:
    tags = list(tags)
    return all(f.matches(tags) for f in filters)


@dataclass
class TagStyle:
    fg: str = DEFAULT_FG
    bg: Optional[str] = None


class TagStyles:
    """Sorted mapping of tag name to :class:`TagStyle`."""

    def __init__(self, styles: Optional[Dict[str, TagStyle]] = None):
        self._styles: Dict[str, TagStyle] = dict(styles or {})

    def __len__(self) -> int:
        return len(self._styles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagStyles):
            return NotImplemented
        return self._styles == other._styles

    def items(self) -> Iterator[Tuple[str, TagStyle]]:
        for tag in sorted(self._styles):
            yield tag, self._styles[tag]

    def get(self, tag: str) -> Optional[TagStyle]:
        return self._styles.get(tag)

    def set_fg(self, tag: str, fg: str) -> None:
        self._styles.setdefault(tag, TagStyle()).fg = fg

    def set_bg(self, tag: str, bg: str) -> None:
        self._styles.setdefault(tag, TagStyle()).bg = bg


__all__ = [
    "COLOURS",
    "DEFAULT_FG",
    "FilterTag",
    "parse_add_tag",
    "matches_all",
    "TagStyle",
    "TagStyles",
]
