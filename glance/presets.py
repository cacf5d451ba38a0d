"""Built-in and user-defined filter presets."""

from __future__ import annotations

import csv
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from glance.errors import GlanceError
from glance.paths import config_path, ensure_config_dir


@dataclass(frozen=True)
class Preset:
    """A named regular expression with a short description."""

    name: str
    regex: str
    desc: str = ""


BUILTIN_PRESETS: tuple[Preset, ...] = (
    Preset(
        "errors",
        r"(?i)error|err|fail|fatal|panic|exception|traceback",
        "Error detection",
    ),
    Preset("warnings", r"(?i)warn|warning|deprecated", "Warnings"),
    Preset(
        "status",
        r"(?i)exit code|status|returned?\s+[0-9]+|HTTP\s+[45][0-9][0-9]",
        "Status/exit codes",
    ),
)

_VALID_NAME = re.compile(r"[A-Za-z0-9_-]+")


def get_builtin_preset(name: str) -> str | None:
    """Return the regex of a built-in preset, or None."""
    return next((p.regex for p in BUILTIN_PRESETS if p.name == name), None)


def scan_preset_file(path: str | Path) -> list[Preset]:
    """Read presets from a CSV file; a missing file holds none.

    Every record must have as many fields as the first one. Records with
    fewer than two fields are skipped.
    """
    try:
        handle = open(path, newline="", encoding="utf-8")
    except FileNotFoundError:
        return []
    result: list[Preset] = []
    expected: int | None = None
    with handle:
        reader = csv.reader(handle)
        try:
            for record in reader:
                if not record:
                    continue
                if expected is None:
                    expected = len(record)
                elif len(record) != expected:
                    raise GlanceError(
                        f"record on line {reader.line_num}: wrong number of fields"
                    )
                if len(record) < 2:
                    continue
                desc = record[2] if len(record) >= 3 else ""
                result.append(Preset(record[0], record[1], desc))
        except csv.Error as exc:
            raise GlanceError(f"{path}: {exc}") from exc
    return result


def read_user_presets() -> list[Preset]:
    """Return the user presets, or none if the file cannot be read."""
    try:
        return scan_preset_file(config_path())
    except (OSError, GlanceError):
        return []


def get_user_preset(name: str) -> str | None:
    """Return the regex of a user preset, or None."""
    return next((p.regex for p in read_user_presets() if p.name == name), None)


def resolve_preset(name: str) -> str:
    """Return the regex for a preset name, built-ins first."""
    regex = get_builtin_preset(name)
    if regex is None:
        regex = get_user_preset(name)
    if regex is None:
        raise GlanceError(f"unknown preset: {name}")
    return regex


def is_valid_preset_name(name: str) -> bool:
    """A name is ASCII letters, digits, '_' and '-', not starting with '-'."""
    return (
        bool(name) and not name.startswith("-") and _VALID_NAME.fullmatch(name) is not None
    )


def write_presets(path: str | Path, presets: list[Preset]) -> None:
    """Write presets to a CSV file, replacing its contents."""
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerows((p.name, p.regex, p.desc) for p in presets)


def add_preset(name: str, regex: str, desc: str = "") -> None:
    """Add a user preset, replacing any existing one of the same name."""
    if not is_valid_preset_name(name):
        raise GlanceError(
            f"invalid preset name: {name} (must start with alphanumeric, "
            "use only alphanumeric/hyphens/underscores)"
        )
    if get_builtin_preset(name) is not None:
        raise GlanceError(f"cannot override built-in preset: {name}")
    ensure_config_dir()
    path = config_path()
    try:
        existing = scan_preset_file(path)
    except (OSError, GlanceError):
        existing = []
    kept = [p for p in existing if p.name != name]
    kept.append(Preset(name, regex, desc))
    write_presets(path, kept)


def remove_preset(name: str) -> None:
    """Remove a user preset."""
    if get_builtin_preset(name) is not None:
        raise GlanceError(f"cannot remove built-in preset: {name}")
    path = config_path()
    try:
        existing = scan_preset_file(path)
    except (OSError, GlanceError):
        existing = []
    kept = [p for p in existing if p.name != name]
    if not existing or len(kept) == len(existing):
        raise GlanceError(f"preset not found: {name}")
    write_presets(path, kept)


def _row(preset: Preset) -> str:
    return f"  {preset.name:<10} {preset.desc:<20} {preset.regex}"


def format_preset_list() -> str:
    """Return the listing shown by "glance presets list"."""
    lines = ["Built-in presets:", *map(_row, BUILTIN_PRESETS)]
    user = read_user_presets()
    if user:
        lines += ["", "User presets:", *map(_row, user)]
    return "\n".join(lines) + "\n"


def do_presets(args: list[str]) -> None:
    """Run the "presets" subcommand."""
    if not args:
        raise GlanceError("Usage: glance presets <list|add|remove>", prefix=None)
    sub, rest = args[0], args[1:]
    if sub == "list":
        sys.stdout.write(format_preset_list())
    elif sub == "add":
        if len(rest) < 2:
            raise GlanceError(
                "Usage: glance presets add <name> <regex> [description]", prefix=None
            )
        name, regex, *desc = rest
        add_preset(name, regex, " ".join(desc))
        print(f"Added preset: {name}")
    elif sub == "remove":
        if not rest:
            raise GlanceError("Usage: glance presets remove <name>", prefix=None)
        remove_preset(rest[0])
        print(f"Removed preset: {rest[0]}")
    else:
        raise GlanceError(f"unknown subcommand: {sub}", prefix="glance presets")