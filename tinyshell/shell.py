"""An interactive shell that times every command it runs."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import IO, Sequence, TextIO

from tinyshell.colors import Color, colorize
from tinyshell.parsing import (
    ends_with_background,
    split_command,
    split_pipeline,
    strip_background,
    trim,
)

HISTORY_WIDTH = 80
_TIME_FORMAT = "%A, %B %d - %H:%M:%S\n"
_EOF_MESSAGE = "fgets has failed or there is nothing to input anymore!"


def _report_error(message: object) -> None:
    print(f"ERROR: {message}", file=sys.stderr)


@dataclass(frozen=True)
class CommandRecord:
    """One executed command: its history number, text, pid and timing."""

    index: int
    line: str
    pid: int
    started: datetime
    ended: datetime

    @property
    def duration(self) -> float:
        """Elapsed time in seconds."""
        return (self.ended - self.started).total_seconds()

    def format(self) -> str:
        """Render the record as shown in the exit report."""
        start = self.started.strftime(_TIME_FORMAT)
        end = self.ended.strftime(_TIME_FORMAT)
        return (
            f'{self.index}) Command "{self.line}" executed by \n'
            f"\tpid: {self.pid}\n\n"
            f"\tStartTime: {start}\n"
            f"\tEndTime: {end}\n"
            f"\tDuration: {self.duration:f} s\n\n"
        )


class Shell:
    """Read command lines, run them and keep a history of what ran."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = sys.stdin if stdin is None else stdin
        self.stdout = sys.stdout if stdout is None else stdout
        self._history: list[str] = []
        self._records: list[CommandRecord] = []
        self._background: list[subprocess.Popen] = []

    @property
    def history(self) -> tuple[str, ...]:
        """The command lines entered so far, each cut to the history width."""
        return tuple(self._history)

    @property
    def records(self) -> tuple[CommandRecord, ...]:
        """The records of every command launched so far."""
        return tuple(self._records)

    def prompt(self) -> str:
        """The coloured prompt showing the working directory."""
        return (
            colorize("assignment2@shell:", Color.MAGENTA)
            + colorize("~", Color.CYAN)
            + colorize(os.getcwd(), Color.YELLOW)
            + colorize("$ ", Color.WHITE)
        )

    def format_history(self) -> str:
        """Numbered history listing with each entry in cyan."""
        return "".join(
            f"{number}. {colorize(entry, Color.CYAN)}\n"
            for number, entry in enumerate(self._history, 1)
        )

    def exit_report(self) -> str:
        """The report of every executed command, printed on interrupt."""
        return "".join(record.format() for record in self._records)

    def _output_fd(self) -> int | None:
        try:
            return self.stdout.fileno()
        except (AttributeError, OSError):
            return None

    def _write_captured(self, proc: subprocess.Popen) -> None:
        out, _ = proc.communicate()
        if out:
            self.stdout.write(out.decode(errors="replace"))

    def _check_termination(self, proc: subprocess.Popen) -> None:
        if proc.returncode is not None and proc.returncode < 0:
            self.stdout.write(f"Abnormal termination of {proc.pid}\n")

    def _reap(self) -> None:
        self._background = [proc for proc in self._background if proc.poll() is None]

    def launch(self, command: str, args: str, background: bool = False) -> int:
        """Run one command with space-separated ``args``; return its pid.

        Builtins and commands that cannot be found are handled in-process
        and report the shell's own pid.
        """
        if command == "history":
            if trim(args):
                self.stdout.write("Too many args!")
            else:
                self.stdout.write(self.format_history())
            return os.getpid()

        if shutil.which(command) is None:
            self.stdout.write(f'Command: "{command}" not found.\n')
            return os.getpid()

        argv = [command, *(word for word in args.split(" ") if word)]
        target = self._output_fd()
        capture = target is None and not background
        self.stdout.flush()
        try:
            proc = subprocess.Popen(argv, stdout=subprocess.PIPE if capture else target)
        except OSError as exc:
            _report_error(exc.strerror or exc)
            return os.getpid()

        if background:
            self._background.append(proc)
            return proc.pid

        if capture:
            self._write_captured(proc)
        else:
            proc.wait()
        self._check_termination(proc)
        return proc.pid

    def launch_pipeline(self, line: str, background: bool = False) -> int:
        """Run the ``|``-separated stages of ``line``; return the last pid."""
        commands = [split_command(stage) for stage in split_pipeline(line)]
        argvs = [[name, *(word for word in rest.split(" ") if word)] for name, rest in commands]

        target = self._output_fd()
        capture = target is None and not background
        self.stdout.flush()

        procs: list[subprocess.Popen] = []
        last_proc: subprocess.Popen | None = None
        previous_out: IO[bytes] | None = None
        for position, argv in enumerate(argvs):
            is_last = position == len(argvs) - 1
            if previous_out is not None:
                stage_in = previous_out
            else:
                stage_in = None if position == 0 else subprocess.DEVNULL
            if is_last:
                stage_out = subprocess.PIPE if capture else target
            else:
                stage_out = subprocess.PIPE
            try:
                proc: subprocess.Popen | None = subprocess.Popen(
                    argv, stdin=stage_in, stdout=stage_out
                )
            except OSError as exc:
                _report_error(exc.strerror or exc)
                proc = None
            if previous_out is not None:
                previous_out.close()
            previous_out = proc.stdout if proc is not None and not is_last else None
            if proc is not None:
                procs.append(proc)
                if is_last:
                    last_proc = proc

        if not procs:
            return os.getpid()

        if background:
            self._background.extend(procs)
            return procs[-1].pid

        if last_proc is not None and capture:
            self._write_captured(last_proc)
        for proc in procs:
            proc.wait()
            self._check_termination(proc)
        return procs[-1].pid

    def run_line(self, line: str) -> int | None:
        """Execute one input line; return the pid recorded for it, if any."""
        return self._dispatch(line, allow_run=True)

    def run_script(self, path: str) -> None:
        """Execute every non-empty line of the file at ``path``."""
        try:
            handle = open(path, encoding="utf-8")
        except OSError as exc:
            _report_error(exc.strerror or exc)
            return
        with handle:
            for raw in handle:
                self._dispatch(raw, allow_run=False)

    def _dispatch(self, line: str, allow_run: bool) -> int | None:
        line = line.split("\n", 1)[0]
        if not line.strip(" "):
            return None

        entry = line[:HISTORY_WIDTH]
        background = ends_with_background(line)
        if background:
            line = strip_background(line)

        is_pipeline = "|" in line
        try:
            if is_pipeline:
                for stage in split_pipeline(line):
                    split_command(stage)
            else:
                command, args = split_command(line)
        except ValueError as exc:
            _report_error(exc)
            return None

        if not is_pipeline and allow_run and command == "run":
            self.run_script(args)
            return None

        self._history.append(entry)
        index = len(self._history)
        started = datetime.now()
        if is_pipeline:
            pid = self.launch_pipeline(line, background)
        else:
            pid = self.launch(command, args, background)
        ended = datetime.now()
        self._records.append(CommandRecord(index, entry, pid, started, ended))
        self._reap()
        return pid

    def loop(self) -> int:
        """Prompt and execute until input ends or an interrupt arrives.

        Returns 1 when input runs out and 0 after an interrupt, which
        prints the exit report.
        """
        try:
            while True:
                self.stdout.write(self.prompt())
                self.stdout.flush()
                line = self.stdin.readline()
                if not line:
                    self.stdout.write(_EOF_MESSAGE)
                    self.stdout.flush()
                    return 1
                self.run_line(line)
        except KeyboardInterrupt:
            self.stdout.write("\n" + self.exit_report())
            self.stdout.flush()
            return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive shell on the standard streams."""
    return Shell(sys.stdin, sys.stdout).loop()


if __name__ == "__main__":
    sys.exit(main())