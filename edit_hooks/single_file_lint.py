#!/usr/bin/env python3
"""
Hook: single-file command runner.

Runs a lint/format command against the one file named in the hook payload.
The payload arrives as JSON on stdin; only ``tool_input.file_path`` is read.
Files outside the TypeScript/JavaScript allow-list are skipped with exit 0.

Hook configuration example:

    {
      "hooks": {
        "PreToolUse": [
          {
            "matcher": "Edit|Write|MultiEdit",
            "hooks": [
              {"type": "command", "command": "single-file-lint --command=eslint"}
            ]
          }
        ]
      }
    }

Usage:
    echo '{"tool_input": {"file_path": "src/app.ts"}}' | single-file-lint --command=eslint
    single-file-lint --command="tsc --noEmit" --timeout=60
    single-file-lint --command="prettier --check"

Allowed extensions: .ts, .tsx, .js, .jsx (case-sensitive)

Exit codes:
    0 - command succeeded, or file skipped (hook allows continuation)
    1 - usage error, bad stdin, missing file, timeout, or command could not be started
    2 - command failed (hook blocks the edit)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from edit_hooks.lib import (
    CONTEXT_SETTINGS,
    EXIT_SUCCESS,
    EXIT_TOOLING_ERROR,
    console,
    emit_error,
    emit_progress,
    invoke_app,
    parse_timeout,
    print_usage,
)
from edit_hooks.lib.config import load_settings
from edit_hooks.lib.hook_input import (
    ALLOWED_EXTENSIONS,
    HookInputError,
    extract_file_path,
    has_allowed_extension,
    read_hook_input,
)
from edit_hooks.lib.observability import split_command
from edit_hooks.lib.report import execute_and_report

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Run a command on the file named in hook data from stdin.",
    add_completion=False,
)

USAGE = """
Usage: single-file-lint --command="<command>" [options]

This program reads the file path from hook data via stdin.

Options:
  --command="<cmd>"    The command to run (required)
  --timeout=<seconds>  Command timeout in seconds (default: 30)
  --shell-split        Tokenize the command with shell quoting rules
  --help, -h           Show this help message

Examples:
  single-file-lint --command="eslint"
  single-file-lint --command="tsc --noEmit" --timeout=60
"""


@app.command(context_settings=CONTEXT_SETTINGS)
def lint(
    command: Annotated[str | None, typer.Option("--command", help="The command to run (required)")] = None,
    timeout: Annotated[str | None, typer.Option("--timeout", help="Command timeout in seconds (default: 30)")] = None,
    shell_split: Annotated[
        bool, typer.Option("--shell-split", help="Honour shell quoting when splitting the command")
    ] = False,
) -> None:
    """Run COMMAND with the hook's file path appended as the last argument."""
    # stdin is always consumed first so payload problems are reported before usage problems
    try:
        hook_input = read_hook_input(sys.stdin.buffer)
    except HookInputError as e:
        emit_error(f"Error reading hook data from stdin: {e}")
        raise typer.Exit(EXIT_TOOLING_ERROR)

    file_path = extract_file_path(hook_input)
    if file_path is None:
        emit_error("No file path found in hook data")
        raise typer.Exit(EXIT_TOOLING_ERROR)

    if command is None or not command.strip():
        emit_error("No command provided")
        print_usage(USAGE)
        raise typer.Exit(EXIT_TOOLING_ERROR)

    if not Path(file_path).is_file():
        emit_error(f"File does not exist: {file_path}")
        raise typer.Exit(EXIT_TOOLING_ERROR)

    if not has_allowed_extension(file_path):
        console.print(
            "[dim]Skipping command - file does not match extensions: "
            f"{', '.join(ALLOWED_EXTENSIONS)}[/dim]"
        )
        emit_progress("File", file_path)
        raise typer.Exit(EXIT_SUCCESS)

    settings = load_settings()
    timeout_seconds = parse_timeout(timeout, settings.timeout)

    try:
        argv = [*split_command(command, shell_split=shell_split or settings.shell_split), file_path]
    except ValueError as e:
        emit_error(f"Cannot parse command: {e}")
        print_usage(USAGE)
        raise typer.Exit(EXIT_TOOLING_ERROR)
    logger.debug("argv=%r timeout=%s", argv, timeout_seconds)

    console.print("[bold]Running command on file[/bold]")
    emit_progress("File", file_path)
    emit_progress("Command", f"{command} {file_path}")

    exit_code = execute_and_report(
        argv,
        timeout=timeout_seconds,
        label="command",
        success_message=f"Command passed for {Path(file_path).name}!",
        failure_message="Command failed with exit code",
        failure_hint="Please fix issues before modifying.",
    )
    raise typer.Exit(exit_code)


def main() -> None:
    invoke_app(app, USAGE)


if __name__ == "__main__":
    main()
