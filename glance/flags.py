"""Command-line flag helpers shared by pipe and show modes."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from glance.errors import GlanceError
from glance.presets import resolve_preset

_INTEGER = re.compile(r"[+-]?[0-9]+")
_MAX_INT = 2**63 - 1


def consume_flag(args: Sequence[str], index: int, name: str) -> tuple[str, int]:
    """Return the value after the flag at ``index`` and the index past it."""
    if index + 1 >= len(args):
        raise GlanceError(f"{name} requires a value")
    return args[index + 1], index + 2


def parse_filter(args: Sequence[str], index: int, filters: list[str]) -> int | None:
    """Handle -f/--filter and -p/--preset at ``index``.

    The pattern is appended to ``filters`` and the index past the flag is
    returned; None means the argument is not a filter flag.
    """
    flag = args[index]
    if flag in ("-f", "--filter"):
        value, index = consume_flag(args, index, "-f")
        filters.append(value)
        return index
    if flag in ("-p", "--preset"):
        value, index = consume_flag(args, index, "-p")
        filters.append(resolve_preset(value))
        return index
    return None


def parse_positive_int(text: str) -> int:
    """Parse a decimal integer; anything not a positive integer gives 0."""
    if not _INTEGER.fullmatch(text):
        return 0
    value = int(text)
    if value <= 0 or value > _MAX_INT:
        return 0
    return value


def compile_filters(filters: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile filter patterns, failing on the first invalid one."""
    compiled = []
    for pattern in filters:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise GlanceError(f"invalid regex {pattern}: {exc}") from exc
    return compiled


def matches_any(patterns: Iterable[re.Pattern[str]], text: str) -> bool:
    """True if any pattern matches somewhere in ``text``."""
    return any(p.search(text) for p in patterns)