"""Pipe mode: summarise standard input as head, tail and matching lines."""

from __future__ import annotations

import io
import secrets
import sys
import time
from collections.abc import Iterator, Sequence
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import IO

from glance.errors import GlanceError
from glance.flags import compile_filters, matches_any, parse_filter, parse_positive_int
from glance.formatting import SCAN_BUFFER_SIZE, plural_lines, section_ranges
from glance.paths import capture_path, ensure_cache_dir
from glance.ring import RingBuffer

DEFAULT_HEAD_TAIL = 10


@dataclass
class PipeConfig:
    """Options for pipe mode."""

    n: int = DEFAULT_HEAD_TAIL
    filters: list[str] = field(default_factory=list)
    no_store: bool = False


def gen_id() -> str:
    """Return a new capture ID: a local timestamp and eight random hex digits."""
    return f"{time.strftime('%Y%m%d-%H%M%S')}-{secrets.token_hex(4)}"


def parse_pipe_args(args: Sequence[str] | None) -> PipeConfig:
    """Parse pipe-mode flags."""
    args = list(args or ())
    config = PipeConfig()
    i = 0
    while i < len(args):
        after = parse_filter(args, i, config.filters)
        if after is not None:
            i = after
            continue
        flag = args[i]
        if flag in ("-n", "--lines", "--head"):
            value = parse_positive_int(args[i + 1]) if i + 1 < len(args) else 0
            if value <= 0:
                raise GlanceError("-n must be a positive integer")
            config.n = value
            i += 2
        elif flag == "--no-store":
            config.no_store = True
            i += 1
        else:
            raise GlanceError(f"unknown flag: {flag}", hint="Try: glance help")
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


def run_pipe(config: PipeConfig, stdin: IO[str], stdout: IO[str]) -> str | None:
    """Summarise ``stdin`` onto ``stdout``; return the capture ID if stored."""
    patterns = compile_filters(config.filters)
    capture_id: str | None = None
    printed: list[int] = []
    ring = RingBuffer(config.n)
    total = 0

    with ExitStack() as stack:
        capture: IO[str] | None = None
        if not config.no_store:
            try:
                ensure_cache_dir()
                capture_id = gen_id()
                capture = stack.enter_context(
                    open(
                        capture_path(capture_id),
                        "w",
                        encoding="utf-8",
                        errors="surrogateescape",
                        newline="",
                    )
                )
            except OSError as exc:
                raise GlanceError(str(exc)) from exc

        for total, text in enumerate(_scan_lines(stdin), start=1):
            if capture is not None:
                capture.write(text + "\n")
            if total <= config.n:
                stdout.write(f"{total}: {text}\n")
                printed.append(total)
                continue
            evicted = ring.push(total, text, matches_any(patterns, text))
            if evicted is not None and evicted.matched:
                stdout.write(f"{evicted.num}: {evicted.text}\n")
                printed.append(evicted.num)

    for entry in ring.entries():
        stdout.write(f"{entry.num}: {entry.text}\n")
        printed.append(entry.num)

    printed.sort()
    label = f"glance id={capture_id}" if capture_id else "glance"
    if total == 0:
        stdout.write(f"--- {label} | 0 lines | showing 0 ---\n")
    else:
        stdout.write(
            f"--- {label} | {plural_lines(total)} | showing {len(printed)} "
            f"| sections: {section_ranges(printed)} ---\n"
        )
    stdout.flush()
    return capture_id


@contextmanager
def _utf8_stream(stream: IO[str], newline: str) -> Iterator[IO[str]]:
    """View a standard stream as UTF-8 text that tolerates invalid bytes."""
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        yield stream
        return
    stream.flush()
    wrapper = io.TextIOWrapper(
        buffer, encoding="utf-8", errors="surrogateescape", newline=newline
    )
    try:
        yield wrapper
    finally:
        wrapper.flush()
        wrapper.detach()


def do_pipe(args: Sequence[str] | None) -> None:
    """Run pipe mode on the process's standard input and output."""
    config = parse_pipe_args(args)
    with _utf8_stream(sys.stdin, "\n") as stdin, _utf8_stream(sys.stdout, "") as stdout:
        run_pipe(config, stdin, stdout)