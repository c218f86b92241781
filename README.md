# tinyshell

A small interactive command shell for POSIX systems that records how long
every command took.

## Features

- Coloured prompt showing the current working directory.
- Runs any program found on your `PATH`. Arguments are split on spaces.
  If the program cannot be found, the shell prints
  `Command: "<name>" not found.`
- Pipelines: `ls -l | grep py | wc -l`.
- Background jobs: end a line with `&` and the shell does not wait for it.
  Finished background jobs are reaped after each command.
- `history` lists every command line entered in the session. Each entry is
  numbered, shown in cyan and cut to 80 characters. If you give `history`
  any arguments, it prints `Too many args!`.
- `run <file>` runs each non-empty line of a file as a command. Those lines
  also go into the history. Inside such a file, `run` is not treated as a
  builtin.
- Press Ctrl-C to leave. The shell then prints a report for every command it
  ran: its number, the command line, the process id, the start time, the end
  time and the duration in seconds.
- When input ends (for example with Ctrl-D), the shell prints
  `fgets has failed or there is nothing to input anymore!` and exits with
  status 1.

## Installation

```
pip install .
```

## Usage

```
tinyshell
```

Example session:

```
assignment2@shell:~/home/me$ echo hello
hello
assignment2@shell:~/home/me$ ls | wc -l
12
assignment2@shell:~/home/me$ sleep 5 &
assignment2@shell:~/home/me$ history
1. echo hello
2. ls | wc -l
3. sleep 5 &
4. history
```

Two small demo programs are included:

```
tinyshell-hello
tinyshell-fib 10
```

`tinyshell-hello` prints `Hello world!`. `tinyshell-fib N` prints the N-th
Fibonacci number, so `tinyshell-fib 10` prints `55`. If it gets anything other
than exactly one argument, it prints `Not the correct no.of arguments.` and
exits with status 1.

## What it does not do

Each line is split on spaces and `|` only. The shell has no quoting, no
escaping, no variables, no globbing and no `<` / `>` redirection. It has no
builtins besides `history` and `run`. There is no `cd` and no `exit`
command; leave with Ctrl-C or end of input.

## Using it from Python

```python
import io
from tinyshell.shell import Shell

out = io.StringIO()
shell = Shell(stdin=io.StringIO("echo hi\n"), stdout=out)
shell.loop()                 # returns 1 once input runs out
print(shell.history)         # ('echo hi',)
print(shell.exit_report())
```

- `Shell.run_line(line)` runs a single line and returns the pid recorded for
  it. It returns `None` for blank lines and for `run`.
- `Shell.run_script(path)` runs a script file.
- `Shell.launch(command, args, background)` and
  `Shell.launch_pipeline(line, background)` start commands directly.
- `Shell.records` holds a `CommandRecord` for each command. Each record has
  `index`, `line`, `pid`, `started`, `ended`, `duration` and `format()`.

When the output stream has no file descriptor, as with `io.StringIO`, the
output of foreground commands is captured and written to that stream.

`tinyshell.parsing` has the line helpers the shell uses: `trim`,
`ends_with_background`, `strip_background`, `split_command` and
`split_pipeline`.

`tinyshell.colors` provides the `Color` enum and `colorize(text, color)`. It
also has the helpers `black`, `red`, `green`, `yellow`, `blue`, `magenta`,
`cyan` and `white`. Each helper writes text wrapped in ANSI colour codes to a
stream, which is standard output by default.

## Development

```
pip install -e .[test]
pytest
```