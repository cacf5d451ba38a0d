"""Small formatting helpers for footers and listings."""

from __future__ import annotations

from collections.abc import Iterable

SCAN_BUFFER_SIZE = 1024 * 1024


def format_age(secs: int) -> str:
    """Describe an age in seconds as a short "N<unit> ago" string."""
    if secs <= 0:
        return "unknown"
    if secs < 60:
        return f"{secs}s ago"
    if secs < 3600:
        return f"{secs // 60}m ago"
    if secs < 86400:
        return f"{secs // 3600}h ago"
    return f"{secs // 86400}d ago"


def plural_lines(n: int) -> str:
    """Return "1 line" or "N lines"."""
    return "1 line" if n == 1 else f"{n} lines"


def _span(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"


def section_ranges(nums: Iterable[int]) -> str:
    """Collapse sorted line numbers into a string such as "1-5, 10, 20-25"."""
    parts: list[str] = []
    start: int | None = None
    prev: int | None = None
    for n in nums:
        if prev is not None and n == prev + 1:
            prev = n
            continue
        if start is not None and prev is not None:
            parts.append(_span(start, prev))
        start = prev = n
    if start is not None and prev is not None:
        parts.append(_span(start, prev))
    return ", ".join(parts)