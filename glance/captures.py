"""Listing and purging stored captures."""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from glance.errors import GlanceError
from glance.formatting import format_age
from glance.paths import cache_dir, config_path, ensure_cache_dir

_CHUNK = 32 * 1024


def count_lines(path: str | Path) -> int:
    """Count newline bytes in a file; an unreadable file counts as 0."""
    count = 0
    try:
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK), b""):
                count += chunk.count(b"\n")
    except OSError:
        pass
    return count


def list_captures(now: float | None = None) -> list[tuple[str, int, str]]:
    """Return (id, line count, age) for each stored capture, sorted by ID."""
    try:
        directory = ensure_cache_dir()
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise GlanceError(str(exc)) from exc
    if now is None:
        now = time.time()

    result = []
    for entry in entries:
        if entry.is_dir() or entry.suffix != ".txt":
            continue
        try:
            age = format_age(int(now - entry.stat().st_mtime))
        except OSError:
            age = "unknown"
        result.append((entry.name[: -len(".txt")], count_lines(entry), age))
    return result


def do_list() -> None:
    """Run the "list" subcommand."""
    captures = list_captures()
    if not captures:
        print("No stored captures.")
        return
    for capture_id, lines, age in captures:
        print(f"{capture_id}\t{lines} lines\t{age}")


def do_clean(args: list[str]) -> None:
    """Run the "clean" subcommand; "--all" also removes user presets."""
    shutil.rmtree(cache_dir(), ignore_errors=True)
    if args and args[0] == "--all":
        try:
            config_path().unlink()
        except OSError:
            pass
        print("Purged all captures and user presets.")
    else:
        print("Purged all captures.")