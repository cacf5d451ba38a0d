import io

import pytest

from glance.errors import GlanceError
from glance.paths import capture_path, ensure_cache_dir
from glance.show import (
    DEFAULT_AROUND_CONTEXT,
    AroundSpec,
    ShowConfig,
    do_show,
    parse_range,
    parse_show_args,
    run_show,
)

CAPTURE = "20260101-120000-0a0b0c0d"


def seq(n):
    return "".join(f"{i}\n" for i in range(1, n + 1))


@pytest.fixture(autouse=True)
def env(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    ensure_cache_dir()
    capture_path(CAPTURE).write_text(seq(50))
    return tmp_path


def show(*args):
    out = io.StringIO()
    run_show(parse_show_args([CAPTURE, *args]), out)
    return out.getvalue()


def footer(output):
    return output.rstrip("\n").split("\n")[-1]


@pytest.mark.parametrize(
    "args, expected",
    [
        (["myid"], ShowConfig("myid")),
        (["myid", "-l", "5-10"], ShowConfig("myid", ranges=[(5, 10)])),
        (["myid", "-f", "err"], ShowConfig("myid", filters=["err"])),
        (["myid", "-a", "25", "3"], ShowConfig("myid", around=[AroundSpec(25, 3)])),
        (
            ["myid", "-a", "25"],
            ShowConfig("myid", around=[AroundSpec(25, DEFAULT_AROUND_CONTEXT)]),
        ),
    ],
)
def test_parse_show_args(args, expected):
    assert parse_show_args(args) == expected


def test_around_followed_by_flag_uses_default_context():
    config = parse_show_args(["myid", "-a", "25", "-f", "x"])
    assert config.around == [AroundSpec(25, 5)]
    assert config.filters == ["x"]


@pytest.mark.parametrize(
    "args",
    [
        None,
        ["foo/bar"],
        ["foo..bar"],
        ["myid", "-l", "abc"],
        ["myid", "--bogus"],
        ["myid", "-a", "abc"],
    ],
)
def test_parse_show_args_errors(args):
    with pytest.raises(GlanceError):
        parse_show_args(args)


def test_error_prefix():
    with pytest.raises(GlanceError) as info:
        parse_show_args(["myid", "--bogus"])
    assert info.value.render() == "glance show: unknown flag: --bogus\n"


@pytest.mark.parametrize("value", ["abc", "5-abc"])
def test_invalid_lines_range(value):
    with pytest.raises(GlanceError, match="invalid range, must be N-M"):
        parse_show_args([CAPTURE, "--lines", value])


def test_around_bad_center():
    with pytest.raises(GlanceError, match="must be a positive integer"):
        parse_show_args([CAPTURE, "--around", "abc", "5"])


def test_around_bad_context():
    with pytest.raises(GlanceError, match="context must be a positive integer"):
        parse_show_args([CAPTURE, "--around", "25", "xyz"])


@pytest.mark.parametrize("capture_id", ["../../etc/passwd", "foo/bar"])
def test_path_traversal_rejected(capture_id):
    with pytest.raises(GlanceError, match="invalid capture ID"):
        parse_show_args([capture_id])


@pytest.mark.parametrize(
    "text, expected",
    [("5-10", (5, 10)), ("abc", (0, 0)), ("5-abc", (5, 0)), ("-3", (0, 3))],
)
def test_parse_range(text, expected):
    assert parse_range(text) == expected


def test_full_output():
    assert show() == seq(50)


def test_line_range():
    out = show("--lines", "5-10")
    lines = out.rstrip("\n").split("\n")
    assert len(lines) == 7
    assert lines[0] == "5: 5"
    assert lines[-1] == f"--- glance show {CAPTURE} | 50 lines | showing 6 | sections: 5-10 ---"


def test_filter_within_stored():
    out = show("--filter", "^1[0-9]$")
    assert "10: 10\n" in out
    assert "sections: 10-19" in footer(out)


def test_around():
    out = show("--around", "25", "2")
    assert "sections: 23-27" in footer(out)
    assert "23: 23\n" in out and "27: 27\n" in out


def test_around_near_start():
    out = show("--around", "1", "3")
    assert "sections: 1-4" in footer(out)
    assert "0:" not in out.replace("10:", "")


def test_around_near_end():
    out = show("--around", "50", "3")
    assert "showing 4 | sections: 47-50" in footer(out)


def test_combo_lines_and_filter():
    out = show("--lines", "1-3", "--filter", "^4[0-9]$")
    assert "showing 13 | sections: 1-3, 40-49" in footer(out)
    assert "20: 20" not in out


def test_combo_filter_and_around():
    out = show("--filter", "^5$", "--around", "40", "2")
    assert "sections: 5, 38-42" in footer(out)


def test_around_beyond_eof():
    out = show("--around", "48", "10")
    assert "showing 13 | sections: 38-50" in footer(out)
    assert "51:" not in out


def test_lines_range_beyond_eof():
    out = show("--lines", "45-100")
    assert "showing 6 | sections: 45-50" in footer(out)
    assert "51:" not in out


def test_filter_only():
    out = show("-f", "^2[0-5]$")
    assert "showing 6 | sections: 20-25" in footer(out)
    assert "26: 26" not in out


def test_around_center_at_one():
    out = show("--around", "1", "2")
    assert "showing 3 | sections: 1-3" in footer(out)


def test_around_center_beyond_eof():
    out = show("--around", "100", "5")
    assert out == f"--- glance show {CAPTURE} | 50 lines | showing 0 | sections:  ---\n"


def test_preset_in_show():
    capture_path("pre").write_text("line1\nERROR something\nline3\n")
    for flag in ("-p", "--preset"):
        out = io.StringIO()
        run_show(parse_show_args(["pre", flag, "errors"]), out)
        assert out.getvalue().startswith("2: ERROR something\n")


def test_capture_not_found():
    with pytest.raises(GlanceError, match="capture not found: zzz") as info:
        run_show(ShowConfig("zzz"), io.StringIO())
    assert info.value.hint == 'Use "glance list" to see stored captures.'


def test_invalid_regex():
    with pytest.raises(GlanceError, match="invalid regex"):
        show("-f", "[")


def test_do_show(capsys):
    do_show([CAPTURE, "-l", "1-2"])
    assert capsys.readouterr().out == (
        f"1: 1\n2: 2\n--- glance show {CAPTURE} | 50 lines | showing 2 | sections: 1-2 ---\n"
    )