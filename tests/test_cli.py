import re

import pytest

from tisemu.cli import Options, UsageError, banner, main, parse_args


def test_parse_args_input_file_only():
    options = parse_args(["prog.tis"])
    assert options == Options(input_file="prog.tis")


def test_parse_args_flags():
    options = parse_args(["-i", "42", "-d", "-c", "prog.tis"])
    assert options.inpt == 42
    assert options.debug is True
    assert options.color is True
    assert options.input_file == "prog.tis"


def test_parse_args_long_flags():
    options = parse_args(["--input", "-7", "--debug", "--color", "prog.tis"])
    assert options.inpt == -7
    assert options.debug and options.color


@pytest.mark.parametrize("raw, expected", [("12abc", 12), ("x", 0), ("  5", 5)])
def test_parse_args_input_is_leading_integer(raw, expected):
    assert parse_args(["-i", raw, "f"]).inpt == expected


def test_parse_args_last_file_wins():
    assert parse_args(["a.tis", "b.tis"]).input_file == "b.tis"


def test_parse_args_trailing_input_flag_is_unknown():
    with pytest.raises(UsageError, match="unknown option '-i'"):
        parse_args(["prog.tis", "-i"])


def test_parse_args_unknown_option():
    with pytest.raises(UsageError, match="unknown option '--bogus'"):
        parse_args(["--bogus", "prog.tis"])


def test_parse_args_requires_input_file():
    with pytest.raises(UsageError, match="no input file provided"):
        parse_args(["-d"])


@pytest.mark.parametrize(
    "flag, action",
    [("-h", "help"), ("--help", "help"), ("--doc", "doc"), ("-v", "version"), ("--version", "version")],
)
def test_parse_args_actions_stop_parsing(flag, action):
    assert parse_args([flag, "--bogus"]).action == action


def test_parse_args_banner_takes_colour_in_force():
    assert parse_args(["-c", "--banner", "f"]).banners == [True]
    assert parse_args(["--banner", "-c", "f"]).banners == [False]


def test_banner_plain_and_coloured():
    plain = banner(False)
    coloured = banner(True)
    assert "\033[" not in plain
    assert coloured.startswith("\033[36m\033[1m")
    assert "Version : 1.0" in plain
    assert re.sub(r"\033\[[0-9;]*m", "", coloured) == plain


def test_main_version(capsys):
    assert main(["-v"]) == 0
    assert capsys.readouterr().out == "tisemu version 1.0\n"


def test_main_banner_then_version(capsys):
    assert main(["--banner", "--version"]) == 0
    out = capsys.readouterr().out
    assert out == banner(False) + "tisemu version 1.0\n"


def test_main_usage_error(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == "error: no input file provided\n"


def test_main_help_reads_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "help.txt").write_text("usage text\n")
    assert main(["--help"]) == 0
    assert capsys.readouterr().out == "usage text\n"


def test_main_help_missing(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["-h"]) == 1
    assert "error: help.txt not found" in capsys.readouterr().err


def test_main_doc_reads_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "doc").mkdir()
    (tmp_path / "doc" / "doc.txt").write_text("docs here\n")
    assert main(["--doc"]) == 0
    assert capsys.readouterr().out == "docs here\n"


def test_main_missing_program(tmp_path, capsys):
    assert main([str(tmp_path / "absent.tis")]) == 1
    assert capsys.readouterr().err.startswith("fopen:")


def test_main_runs_program(tmp_path, capsys):
    program = tmp_path / "prog.tis"
    program.write_text("mov 5 acc\nadd 3\nmov acc out\n")
    assert main([str(program)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "8"
    assert re.fullmatch(r"work time \d+\.\d{6}s", lines[-1])


def test_main_uses_input_register(tmp_path, capsys):
    program = tmp_path / "prog.tis"
    program.write_text("mov inpt out\n")
    assert main(["-i", "17", str(program)]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "17"


def test_main_reports_program_error(tmp_path, capsys):
    program = tmp_path / "bad.tis"
    program.write_text("mov 1 nil\n")
    assert main([str(program)]) == 0
    captured = capsys.readouterr()
    assert f"{program}:1: error: invalid mov: cannot write to 'nil'" in captured.err
    assert captured.out.startswith("work time ")


def test_main_debug_output(tmp_path, capsys):
    program = tmp_path / "prog.tis"
    program.write_text("sav\n")
    assert main(["-d", str(program)]) == 0
    out = capsys.readouterr().out
    assert "[DEBUG INFO]" in out
    assert "-------------------" in out