# glance

`glance` turns long command output into a short, token-efficient summary.
It prints the first and last lines, and any lines in between that match a
regular expression. It stores the full output under an ID so you can drill
into it later.

## Install

    pip install .

This installs the `glance` command. It needs no third-party libraries.

## Pipe mode

    make 2>&1 | glance                  # head 10 + tail 10
    make 2>&1 | glance -n 5             # head 5 + tail 5
    make 2>&1 | glance -f 'ERROR|WARN'  # plus lines matching a regex
    make 2>&1 | glance -p errors        # plus lines matching a preset
    make 2>&1 | glance --no-store       # don't store, no ID

Each printed line starts with its line number. A footer follows it:

    --- glance id=20260219-143022-a3f8b1c0 | 1000 lines | showing 20 | sections: 1-10, 991-1000 ---

With `--no-store` the footer has no `id=` part. If the input is empty, the
footer reads `0 lines | showing 0`.

Flags:

- `-n, --head, --lines N`: head/tail line count (default 10). It must be a positive integer.
- `-f, --filter REGEX`: filter for middle lines (repeatable, OR).
- `-p, --preset NAME`: named preset filter (repeatable, OR).
- `--no-store`: don't keep the capture.

Filters use Python regular expression syntax and match anywhere in a line.
If you run `glance` with no arguments while standard input is a terminal, it
stops with an error.

## Working with stored captures

    glance show <id>                # full stored output, as stored
    glance show <id> -l 50-80       # lines 50 through 80
    glance show <id> -f 'regex'     # filter within stored output
    glance show <id> -p errors      # filter with a preset
    glance show <id> -a 247 5       # 5 lines of context around line 247
    glance list                     # ID, line count and age of each capture
    glance clean                    # remove all captures
    glance clean --all              # also remove user presets

How `show` reads its flags:

- `-l/--lines`, `-a/--around`, `-f/--filter` and `-p/--preset` can each be
  given more than once and combined. A line is shown if any of them selects it.
- For `-a`, the context count is optional (default 5). It is read only when
  the next argument does not start with `-`.
- The ID must match exactly. IDs that contain `/` or `..` are rejected.
- With no flags, `show` prints the capture as it was stored. With flags, it
  prints numbered lines followed by a `--- glance show <id> | ... ---` footer.

## Presets

The built-in presets are `errors`, `warnings` and `status`:

    glance presets list
    glance presets add deploys '(?i)deploy|release|rollout' 'Deployment events'
    glance presets remove deploys

- Built-in presets cannot be removed or overridden.
- Preset names may use ASCII letters, digits, `_` and `-`, and must not start with `-`.
- Adding a preset under an existing user name replaces it.
- User presets are stored as CSV in `$XDG_CONFIG_HOME/glance/presets.csv`.
- Captures go to `$XDG_CACHE_HOME/glance/captures`.
- When those variables are unset, the platform's usual cache and config
  directories are used instead.

## Help and version

    glance help
    glance help show
    glance help presets
    glance version

`glance help` also lists the user presets and the storage paths.

Errors are written to standard error, and the command exits with status 1.

## Using it from Python

The pieces behind the command can be imported:

- `glance.pipe.parse_pipe_args` and `glance.pipe.run_pipe(config, stdin, stdout)`.
  `run_pipe` returns the capture ID, or `None` when nothing was stored.
- `glance.show.parse_show_args` and `glance.show.run_show(config, stdout)`.
- `glance.presets.add_preset`, `remove_preset`, `resolve_preset` and `read_user_presets`.
- `glance.captures.list_captures` and `count_lines`.
- `glance.ring.RingBuffer`, the fixed-size tail window.

Failures raise `glance.errors.GlanceError`.