import io
import os
import sys
from datetime import datetime

import pytest

from tinyshell import shell as shell_module
from tinyshell.colors import Color, colorize
from tinyshell.shell import CommandRecord, Shell, main

PY = sys.executable


def make_shell(text=""):
    return Shell(io.StringIO(text), io.StringIO())


def test_record_format_pinned():
    record = CommandRecord(
        1,
        "ls",
        42,
        datetime(2024, 1, 1, 10, 0, 0),
        datetime(2024, 1, 1, 10, 0, 1, 500000),
    )
    assert record.format() == (
        '1) Command "ls" executed by \n'
        "\tpid: 42\n\n"
        "\tStartTime: Monday, January 01 - 10:00:00\n\n"
        "\tEndTime: Monday, January 01 - 10:00:01\n\n"
        "\tDuration: 1.500000 s\n\n"
    )


def test_record_duration():
    record = CommandRecord(
        2, "x", 1, datetime(2024, 1, 1, 10, 0, 0), datetime(2024, 1, 1, 10, 0, 2)
    )
    assert record.duration == 2.0


def test_prompt_shows_cwd_in_colours():
    text = make_shell().prompt()
    assert text.startswith(colorize("assignment2@shell:", Color.MAGENTA))
    assert colorize(os.getcwd(), Color.YELLOW) in text
    assert text.endswith(colorize("$ ", Color.WHITE))


def test_history_lists_itself():
    sh = make_shell()
    pid = sh.run_line("history")
    assert pid == os.getpid()
    assert sh.stdout.getvalue() == "1. " + colorize("history", Color.CYAN) + "\n"


def test_history_with_args_is_rejected():
    sh = make_shell()
    sh.run_line("history extra")
    assert sh.stdout.getvalue() == "Too many args!"


def test_unknown_command_reported():
    sh = make_shell()
    sh.run_line("nosuchcmd_xyz arg")
    assert sh.stdout.getvalue() == 'Command: "nosuchcmd_xyz" not found.\n'
    assert len(sh.records) == 1


def test_launch_runs_program_and_captures_output():
    sh = make_shell()
    pid = sh.launch(PY, "-c print(42)")
    assert sh.stdout.getvalue() == "42\n"
    assert pid > 0


def test_run_line_records_command():
    sh = make_shell()
    line = f"{PY} -c pass"
    pid = sh.run_line(line)
    (record,) = sh.records
    assert record.index == 1
    assert record.line == line
    assert record.pid == pid
    assert record.duration >= 0
    assert sh.history == (line,)


def test_history_entries_are_truncated():
    sh = make_shell()
    long_line = "nosuchcmd_xyz " + "a" * 200
    sh.run_line(long_line)
    assert sh.history == (long_line[:80],)
    assert sh.records[0].line == long_line[:80]


def test_pipeline_feeds_output_forward():
    sh = make_shell()
    sh.run_line(f"{PY} -c print(7) | {PY} -m base64")
    assert sh.stdout.getvalue() == "Nwo=\n"
    assert len(sh.records) == 1


def test_pipeline_with_empty_stage_is_an_error(capsys):
    sh = make_shell()
    result = sh.run_line("a | | b")
    assert result is None
    assert sh.records == ()
    assert "ERROR" in capsys.readouterr().err


def test_blank_line_is_ignored():
    sh = make_shell()
    assert sh.run_line("") is None
    assert sh.run_line("   \n") is None
    assert sh.history == ()


def test_background_command_keeps_ampersand_in_history():
    sh = make_shell()
    line = f"{PY} -c pass &"
    pid = sh.run_line(line)
    assert pid > 0
    assert sh.history == (line,)
    assert sh.records[0].pid == pid


def test_run_script_executes_lines_and_skips_run(tmp_path):
    script = tmp_path / "script.txt"
    script.write_text(f"{PY} -c print(5)\n\nhistory\n", encoding="utf-8")
    sh = make_shell()
    sh.run_line(f"run {script}")
    assert sh.history == (f"{PY} -c print(5)", "history")
    assert [record.index for record in sh.records] == [1, 2]
    out = sh.stdout.getvalue()
    assert out.startswith("5\n")
    assert "2. " + colorize("history", Color.CYAN) in out


def test_run_missing_script_reports_error(tmp_path, capsys):
    sh = make_shell()
    sh.run_line(f"run {tmp_path / 'missing.txt'}")
    assert sh.records == ()
    assert "ERROR" in capsys.readouterr().err


def test_exit_report_joins_records():
    sh = make_shell()
    sh.run_line("nosuchcmd_xyz")
    sh.run_line("history")
    assert sh.exit_report() == "".join(record.format() for record in sh.records)
    assert len(sh.records) == 2


def test_loop_ends_on_eof():
    sh = make_shell("history\n")
    assert sh.loop() == 1
    out = sh.stdout.getvalue()
    assert out.endswith("fgets has failed or there is nothing to input anymore!")
    assert sh.history == ("history",)


class _InterruptingInput:
    def __init__(self, lines):
        self._lines = list(lines)

    def readline(self):
        if self._lines:
            return self._lines.pop(0)
        raise KeyboardInterrupt


def test_loop_interrupt_prints_exit_report():
    sh = Shell(_InterruptingInput(["nosuchcmd_xyz\n"]), io.StringIO())
    assert sh.loop() == 0
    out = sh.stdout.getvalue()
    assert out.endswith("\n" + sh.exit_report())
    assert 'Command "nosuchcmd_xyz" executed by' in out


def test_main_reads_standard_input(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    stdout = io.StringIO()
    monkeypatch.setattr(sys, "stdout", stdout)
    assert main([]) == 1
    assert stdout.getvalue().endswith(
        "fgets has failed or there is nothing to input anymore!"
    )


@pytest.mark.parametrize("line", ["&", "  &  "])
def test_lone_ampersand_is_an_error(line, capsys):
    sh = make_shell()
    assert sh.run_line(line) is None
    assert "ERROR" in capsys.readouterr().err
    assert shell_module.HISTORY_WIDTH == 80 and sh.history == ()