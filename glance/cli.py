"""Command-line entry point: dispatch to pipe mode or a subcommand."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence

from glance.captures import do_clean, do_list
from glance.errors import GlanceError
from glance.paths import cache_dir, config_path
from glance.pipe import do_pipe
from glance.presets import BUILTIN_PRESETS, Preset, do_presets, read_user_presets
from glance.show import do_show

VERSION = "dev"

_DEPLOY_REGEX = "(?i)deploy|release|rollout"
_DEPLOY_EXAMPLE = f"glance presets add deploys '{_DEPLOY_REGEX}' 'Deployment events'"


def _rows(rows: Iterable[tuple[str, str]], width: int) -> str:
    """Indent ``rows`` two spaces, padding the first column to ``width``."""
    return "".join(
        f"  {left:<{width}}{right}\n" if right else f"  {left}\n"
        for left, right in rows
    )


def _block(title: str, rows: Iterable[tuple[str, str]], width: int) -> str:
    return f"{title}\n" + _rows(rows, width)


def _paragraphs(*parts: str) -> str:
    """Join newline-terminated paragraphs with blank lines between them."""
    return "\n".join(parts)


def _lines(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


def _title(command: str, summary: str) -> str:
    return f"{command} \u2014 {summary}\n"


_SHOW_HELP = _paragraphs(
    _title("glance show", "retrieve stored capture output"),
    _block(
        "Usage:",
        [
            ("glance show <id>", "Full stored output"),
            ("glance show <id> -l 50-80", "Lines 50 through 80"),
            ("glance show <id> -f regex", "Filter within stored output"),
            ("glance show <id> -p errors", "Filter with preset"),
            ("glance show <id> -a 247 5", "5 lines context around line 247"),
        ],
        36,
    ),
    _block(
        "Flags:",
        [
            ("-l, --lines N-M", "Line range"),
            ("-f, --filter REGEX", "Filter pattern (repeatable, OR)"),
            ("-p, --preset NAME", "Preset filter (repeatable, OR)"),
            ("-a, --around N [C]", "Context around line N (default C=5)"),
        ],
        21,
    ),
    _lines(
        "The <id> is the full ID shown in the glance footer when piping output.",
        'Exact match required \u2014 use "glance list" to see all stored captures.',
    ),
)

_LIST_HELP = _paragraphs(
    _title("glance list", "show stored captures"),
    _block("Usage:", [("glance list", "")], 0),
    _lines("Displays each capture's ID, line count, and age."),
)

_CLEAN_HELP = _paragraphs(
    _title("glance clean", "purge stored captures"),
    _block(
        "Usage:",
        [
            ("glance clean", "Remove all stored captures"),
            ("glance clean --all", "Also remove user presets"),
        ],
        22,
    ),
)

_PRESETS_HELP = _paragraphs(
    _title("glance presets", "manage filter presets"),
    _block(
        "Usage:",
        [
            ("glance presets list", "Show all presets"),
            ("glance presets add <name> <regex> [desc]", "Add user preset"),
            ("glance presets remove <name>", "Remove user preset"),
        ],
        43,
    ),
    _lines(
        "Built-in presets cannot be removed or overridden.",
        "Use (?i) prefix in regex for case-insensitive matching:",
    ),
    _rows([(_DEPLOY_EXAMPLE, "")], 0),
)

_PIPE_MODE = [
    ("", "Head 10 + tail 10"),
    (" -n 5", "Head 5 + tail 5"),
    (" -f 'ERROR|WARN'", "+ regex filter matches"),
    (" -p errors", "+ preset filter"),
    (" --no-store", "Don't store, no ID"),
]

_PIPE_FLAGS = [
    ("-n, --head N", "Head/tail line count (default: 10)"),
    ("-f, --filter REGEX", "Additional middle-line filter (repeatable, OR)"),
    ("-p, --preset NAME", "Named preset filter (repeatable, OR)"),
    ("--no-store", "Don't store capture, no ID issued"),
]

_SUBCOMMANDS = [
    ("help [cmd]", "This help (or help for cmd)"),
    ("version", "Print version"),
    ("show <id>", "Full stored output"),
    ("show <id> -l 50-80", "Line range"),
    ("show <id> -f 'regex'", "Filter stored output"),
    ("show <id> -p errors", "Filter with preset"),
    ("show <id> -a 247 5", "Context around line"),
    ("list", "List stored captures"),
    ("clean", "Purge captures"),
    ("presets list", "Show all presets"),
    ("presets add <n> <re> [desc]", "Add user preset"),
    ("presets remove <name>", "Remove user preset"),
]

_EXAMPLES = [
    ("Quick look at build output", "make 2>&1 | glance"),
    ("Find errors in a long log", "kubectl logs pod/api | glance -p errors"),
    (
        "Combine presets and custom filter",
        "docker compose up 2>&1 | glance -p errors -p status -f 'db:5432'",
    ),
    (
        "Drill into a specific capture (use full ID from footer)",
        "glance show 20260219-143022-a3f8b1c0 -a 247 5",
    ),
    ("Add a case-insensitive user preset", _DEPLOY_EXAMPLE),
]

_MAIN_HELP_HEAD = _paragraphs(
    _title("glance", "LLM-optimized output summarizer"),
    _lines(
        "Pipe command output in, get a token-efficient summary showing head/tail",
        "lines plus regex-matched lines, with an ID to drill into full output.",
    ),
    _block(
        "PIPE MODE:",
        ((f"command | glance{flags}", desc) for flags, desc in _PIPE_MODE),
        34,
    ),
    _block("PIPE FLAGS:", _PIPE_FLAGS, 19),
    _block(
        "SUBCOMMANDS:",
        ((f"glance {usage}", desc) for usage, desc in _SUBCOMMANDS),
        37,
    ),
    "BUILT-IN PRESETS:\n",
)

_MAIN_HELP_EXAMPLES = (
    "\nEXAMPLES:\n"
    + "\n".join(f"  # {comment}\n  {command}\n" for comment, command in _EXAMPLES)
    + "\nPATHS:\n"
)

_TOPIC_HELP = {
    "show": _SHOW_HELP,
    "list": _LIST_HELP,
    "clean": _CLEAN_HELP,
}


def is_terminal() -> bool:
    """True if standard input is an interactive terminal."""
    try:
        return bool(sys.stdin.isatty())
    except (AttributeError, ValueError, OSError):
        return False


def _preset_rows(presets: Sequence[Preset]) -> str:
    return "".join(f"  {p.name:<10} {p.desc}\n" for p in presets)


def help_text(topic: str | None = None) -> str:
    """Return the help for a subcommand, or the general help."""
    if topic in _TOPIC_HELP:
        return _TOPIC_HELP[topic]
    if topic == "presets":
        return _PRESETS_HELP + f"User presets are stored in {config_path()}\n"

    parts = [_MAIN_HELP_HEAD, _preset_rows(BUILTIN_PRESETS)]
    user = read_user_presets()
    if user:
        parts += ["\nUSER PRESETS:\n", _preset_rows(user)]
    parts += [
        _MAIN_HELP_EXAMPLES,
        f"  captures:  {cache_dir()}\n",
        f"  presets:   {config_path()}\n",
    ]
    return "".join(parts)


def _dispatch(args: list[str]) -> None:
    if not args:
        if is_terminal():
            raise GlanceError(
                "no input. Pipe command output to glance or use a subcommand.",
                hint="Try: glance help",
            )
        do_pipe(None)
        return

    command, rest = args[0], args[1:]
    if command in ("version", "--version", "-v"):
        print(VERSION)
    elif command in ("help", "--help", "-h"):
        sys.stdout.write(help_text(rest[0] if rest else None))
    elif command == "show":
        do_show(rest)
    elif command == "list":
        do_list()
    elif command == "clean":
        do_clean(rest)
    elif command == "presets":
        do_presets(rest)
    elif command.startswith("-"):
        do_pipe(args)
    else:
        raise GlanceError(f"unknown command: {command}", hint="Try: glance help")


def main(argv: Sequence[str] | None = None) -> int:
    """Run glance with ``argv`` (default: the process arguments); return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        _dispatch(args)
    except GlanceError as exc:
        sys.stdout.flush()
        sys.stderr.write(exc.render())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())