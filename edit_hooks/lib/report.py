"""Run one command and translate its outcome into a hook exit code."""

from __future__ import annotations

import logging

from rich.markup import escape

from . import EXIT_BLOCK, EXIT_CODE_NAMES, EXIT_SUCCESS, EXIT_TOOLING_ERROR, console, emit_error
from .observability import CommandTimeout, relay_result, run_with_timeout

logger = logging.getLogger(__name__)


def execute_and_report(
    argv: list[str],
    *,
    timeout: int,
    label: str,
    success_message: str,
    failure_message: str,
    failure_hint: str,
) -> int:
    """Run argv once and map the outcome onto the hook exit-code convention.

    Args:
        argv: Executable followed by its arguments.
        timeout: Seconds to wait before killing the command.
        label: What is being run, used in execution-error messages.
        success_message: Printed to stderr when the command exits 0.
        failure_message: Printed to stderr (with the exit code) on non-zero exit.
        failure_hint: Follow-up line printed after failure_message.

    Returns:
        EXIT_SUCCESS, EXIT_BLOCK when the command failed, or EXIT_TOOLING_ERROR
        on timeout or when the command could not be started.
    """
    try:
        result = run_with_timeout(argv, timeout=timeout)
    except CommandTimeout:
        emit_error(
            f"Command timed out after {timeout}s",
            "Consider increasing timeout with --timeout=<seconds>",
        )
        return EXIT_TOOLING_ERROR
    except OSError as e:
        emit_error(
            f"Error running {label}: {e}",
            f'Make sure the command "{argv[0]}" is available in your PATH',
        )
        return EXIT_TOOLING_ERROR

    relay_result(result, console)

    if result.succeeded:
        console.print(f"[green]{escape(success_message)}[/green]")
        exit_code = EXIT_SUCCESS
    else:
        console.print(f"[red]{escape(failure_message)}: {result.exit_code}[/red]")
        console.print(f"[yellow]{escape(failure_hint)}[/yellow]")
        exit_code = EXIT_BLOCK

    logger.debug("hook exit %s (%s)", exit_code, EXIT_CODE_NAMES[exit_code])
    return exit_code
