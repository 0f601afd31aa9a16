# mshell

A small interactive shell for POSIX systems. It reads command lines, checks
their syntax, expands variables and runs commands, alone or joined by pipes.

## Features

- Built-in commands: `echo` (with `-n`, `-nn`, ...), `cd`, `pwd`, `env`,
  `export`, `unset` and `exit`. `cd`, `export`, `unset` and `exit` change the
  shell itself when run on their own; inside a pipeline they run on a copy of
  the shell state.
- External commands looked up through `PATH`, or run directly when the name
  starts with `/` or `./` or ends with `/`. Missing commands end with status
  127, directories and unreadable files with 126.
- Pipelines: `ls -l | grep txt | wc -l`. The status of a pipeline is that of
  its last command.
- Redirections: `<`, `>`, `>>` and here-documents with `<<`, also when written
  against other words, as in `cat<in>out`.
- Single and double quotes; `$NAME` and `$?` expansion, suppressed inside
  single quotes and in here-documents whose delimiter is quoted.
- Syntax checks for unclosed quotes, pipes at either end of a line, `||`,
  `<<<`, `>>>` and redirections with no target.
- Ctrl-C cancels the current line, here-document or command (status 130);
  Ctrl-D at the prompt leaves the shell.
- Running `./minishell` increments `SHLVL` before the file is looked up and run.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
mshell
```

The prompt is `42@<user>> ` when `USER` is set, otherwise `42@guest>`.
The shell takes no arguments: given any, it prints an error and returns
without starting. A line holding non-ASCII characters ends the session.

```
42@alice> export GREETING=hello
42@alice> echo "$GREETING world" | tr a-z A-Z > out.txt
42@alice> cat < out.txt
HELLO WORLD
42@alice> cat << EOF
> status was $?
> EOF
status was 0
42@alice> exit
```

Here-document bodies are written to hidden files named after large numbers
(`.2147483647`, `.2147483646`, ...) in the current directory and removed once
the command has finished.

## Using it from Python

```python
from mshell.state import ShellState
from mshell.executor import Executor

state = ShellState.from_envp(["USER=alice", "PATH=/usr/bin:/bin"])
executor = Executor(state, input)
status = executor.run_line("echo hello | tr a-z A-Z")
```

`Executor.run_line` returns the exit status and raises
`mshell.syntax.ShellSyntaxError` for a malformed line and
`mshell.errors.ExitRequest` when `exit` is run.

`mshell.shell.run(state, read_line)` drives the full read-eval loop with any
function that takes a prompt and returns the next line, or `None` at end of
input; it returns the shell's exit status.

The parsing steps can be used on their own: `mshell.parser.parse`,
`mshell.expansion.expand_arguments` and `mshell.redirect.parse_command`.

## What it does not do

There are no command lists (`;`, `&&`, `||`), subshells, wildcards, backslash
escapes, job control or shell scripts. Command history lasts only for the
session and only where Python's `readline` module is available.

## Running the tests

```
pip install .[test]
pytest
```