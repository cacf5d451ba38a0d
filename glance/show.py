"""Show mode: print parts of a stored capture."""

from __future__ import annotations

import io
import shutil
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import IO

from glance.errors import GlanceError
from glance.flags import compile_filters, matches_any, parse_filter, parse_positive_int
from glance.formatting import SCAN_BUFFER_SIZE, plural_lines, section_ranges
from glance.paths import capture_path

DEFAULT_AROUND_CONTEXT = 5

_RANGE_ERROR = "invalid range, must be N-M"
_USAGE = "usage: glance show <id> [--lines N-M] [--filter regex] [--around N C]"


@dataclass(frozen=True)
class AroundSpec:
    """A line to show together with ``context`` lines on each side."""

    center: int
    context: int = DEFAULT_AROUND_CONTEXT


@dataclass
class ShowConfig:
    """Options for show mode."""

    capture_id: str
    ranges: list[tuple[int, int]] = field(default_factory=list)
    around: list[AroundSpec] = field(default_factory=list)
    filters: list[str] = field(default_factory=list)

    @property
    def selects_all(self) -> bool:
        """True when no flag narrows the output."""
        return not (self.ranges or self.around or self.filters)


def _show_error(message: str) -> GlanceError:
    return GlanceError(message, prefix="glance show")


def parse_range(text: str) -> tuple[int, int]:
    """Parse "N-M"; a part that is not a positive integer comes back as 0."""
    start, sep, end = text.partition("-")
    if not sep:
        return 0, 0
    return parse_positive_int(start), parse_positive_int(end)


def parse_show_args(args: Sequence[str] | None) -> ShowConfig:
    """Parse the capture ID and flags of the show command."""
    args = list(args or ())
    if not args:
        raise _show_error(_USAGE)
    capture_id, rest = args[0], args[1:]
    if not capture_id or "/" in capture_id or ".." in capture_id:
        raise _show_error(f"invalid capture ID: {capture_id}")

    config = ShowConfig(capture_id)
    i = 0
    while i < len(rest):
        after = parse_filter(rest, i, config.filters)
        if after is not None:
            i = after
            continue
        flag = rest[i]
        if flag in ("-l", "--lines"):
            if i + 1 >= len(rest):
                raise _show_error(_RANGE_ERROR)
            start, end = parse_range(rest[i + 1])
            if start <= 0 or end <= 0:
                raise _show_error(_RANGE_ERROR)
            config.ranges.append((start, end))
            i += 2
        elif flag in ("-a", "--around"):
            center = parse_positive_int(rest[i + 1]) if i + 1 < len(rest) else 0
            if center <= 0:
                raise _show_error("--around center must be a positive integer")
            context = DEFAULT_AROUND_CONTEXT
            if i + 2 < len(rest) and rest[i + 2] and not rest[i + 2].startswith("-"):
                context = parse_positive_int(rest[i + 2])
                if context <= 0:
                    raise _show_error("--around context must be a positive integer")
                i += 3
            else:
                i += 2
            config.around.append(AroundSpec(center, context))
        else:
            raise _show_error(f"unknown flag: {flag}")
    return config


def _scan_lines(stream: IO[str]) -> Iterator[str]:
    """Yield lines split on newlines, without the newline or a trailing CR."""
    for raw in stream:
        if (
            len(raw) > SCAN_BUFFER_SIZE // 4
            and len(raw.encode("utf-8", "surrogateescape")) > SCAN_BUFFER_SIZE
        ):
            raise GlanceError("token too long")
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def _line_spans(config: ShowConfig) -> list[tuple[int, int]]:
    spans = list(config.ranges)
    spans.extend(
        (max(1, a.center - a.context), a.center + a.context) for a in config.around
    )
    return spans


def _open_capture(path):
    try:
        return open(path, encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as exc:
        raise GlanceError(str(exc)) from exc


def run_show(config: ShowConfig, stdout: IO[str]) -> None:
    """Write the selected lines of a stored capture to ``stdout``."""
    path = capture_path(config.capture_id)
    if not path.exists():
        raise GlanceError(
            f"capture not found: {config.capture_id}",
            hint='Use "glance list" to see stored captures.',
        )

    if config.selects_all:
        with _open_capture(path) as capture:
            shutil.copyfileobj(capture, stdout)
        stdout.flush()
        return

    spans = _line_spans(config)
    patterns = compile_filters(config.filters)
    printed: list[int] = []
    total = 0
    with _open_capture(path) as capture:
        for total, text in enumerate(_scan_lines(capture), start=1):
            in_span = any(lo <= total <= hi for lo, hi in spans)
            if in_span or matches_any(patterns, text):
                stdout.write(f"{total}: {text}\n")
                printed.append(total)

    stdout.write(
        f"--- glance show {config.capture_id} | {plural_lines(total)} "
        f"| showing {len(printed)} | sections: {section_ranges(printed)} ---\n"
    )
    stdout.flush()


@contextmanager
def _utf8_stdout() -> Iterator[IO[str]]:
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        yield sys.stdout
        return
    sys.stdout.flush()
    wrapper = io.TextIOWrapper(
        buffer, encoding="utf-8", errors="surrogateescape", newline=""
    )
    try:
        yield wrapper
    finally:
        wrapper.flush()
        wrapper.detach()


def do_show(args: Sequence[str] | None) -> None:
    """Run the "show" subcommand."""
    config = parse_show_args(args)
    with _utf8_stdout() as stdout:
        run_show(config, stdout)