#!/usr/bin/env python3
"""
Hook: general command runner.

Runs an arbitrary command around a file-edit event and translates its result
into the hook exit-code convention. Status messages go to stderr (visible to
the assistant) while the command's own output goes to stdout.

Hook configuration example:

    {
      "hooks": {
        "PreToolUse": [
          {
            "matcher": "Edit|Write|MultiEdit",
            "hooks": [
              {"type": "command", "command": "run-command --command='npm run lint' --task=linting"}
            ]
          }
        ]
      }
    }

Usage:
    run-command --command="npm run lint" --task=linting
    run-command --command="tsc --noEmit" --task=type-check --timeout=60
    run-command --command="prettier --write ." --task=formatting

Exit codes:
    0 - command succeeded (hook allows continuation)
    1 - usage error, timeout, or command could not be started
    2 - command failed (hook blocks the edit)
"""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.markup import escape

from edit_hooks.lib import (
    CONTEXT_SETTINGS,
    DEFAULT_TASK,
    EXIT_TOOLING_ERROR,
    capitalize_first,
    console,
    emit_error,
    emit_progress,
    invoke_app,
    parse_timeout,
    print_usage,
)
from edit_hooks.lib.config import load_settings
from edit_hooks.lib.observability import split_command
from edit_hooks.lib.report import execute_and_report

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Run a command as a hook and map its exit code to 0/1/2.",
    add_completion=False,
)

USAGE = """
Usage: run-command --command="<command>" [options]

Options:
  --command="<cmd>"    The command to run (required)
  --task=<name>        Name of the task for display (default: "task")
  --timeout=<seconds>  Command timeout in seconds (default: 30)
  --shell-split        Tokenize the command with shell quoting rules
  --help, -h           Show this help message

Examples:
  run-command --command="just lint" --task="lint"
  run-command --command="just check" --task="checks"
  run-command --command="npm test" --task="tests" --timeout=60
"""


@app.command(context_settings=CONTEXT_SETTINGS)
def run(
    command: Annotated[str | None, typer.Option("--command", help="The command to run (required)")] = None,
    task: Annotated[str, typer.Option("--task", help="Name of the task for display")] = DEFAULT_TASK,
    timeout: Annotated[str | None, typer.Option("--timeout", help="Command timeout in seconds (default: 30)")] = None,
    shell_split: Annotated[
        bool, typer.Option("--shell-split", help="Honour shell quoting when splitting the command")
    ] = False,
) -> None:
    """Run COMMAND, relay its output, and exit 0 (passed), 2 (failed) or 1 (error)."""
    if command is None or not command.strip():
        emit_error("No command provided")
        print_usage(USAGE)
        raise typer.Exit(EXIT_TOOLING_ERROR)

    settings = load_settings()
    timeout_seconds = parse_timeout(timeout, settings.timeout)
    use_shell_split = shell_split or settings.shell_split
    task_name = task or DEFAULT_TASK

    try:
        argv = split_command(command, shell_split=use_shell_split)
    except ValueError as e:
        emit_error(f"Cannot parse command: {e}")
        print_usage(USAGE)
        raise typer.Exit(EXIT_TOOLING_ERROR)
    logger.debug("argv=%r timeout=%s", argv, timeout_seconds)

    console.print(f"[bold]Running {escape(task_name)}[/bold]")
    emit_progress("Command", command)

    exit_code = execute_and_report(
        argv,
        timeout=timeout_seconds,
        label=task_name,
        success_message=f"{capitalize_first(task_name)} passed!",
        failure_message=f"{capitalize_first(task_name)} failed with exit code",
        failure_hint="Please fix the errors above.",
    )
    raise typer.Exit(exit_code)


def main() -> None:
    invoke_app(app, USAGE)


if __name__ == "__main__":
    main()
