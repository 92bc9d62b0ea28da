"""Shared constants and helpers for the edit hook programs.

Both programs import from this module for consistent exit codes,
defaults, and status output.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn

import click
import typer
from rich.console import Console
from rich.markup import escape

# -- Exit Codes ---------------------------------------------------------------
# Hook protocol: 0 lets the caller continue, 2 blocks it, 1 reports tooling
# trouble without blocking.

EXIT_SUCCESS = 0
EXIT_TOOLING_ERROR = 1
EXIT_BLOCK = 2

EXIT_CODE_NAMES: dict[int, str] = {
    EXIT_SUCCESS: "SUCCESS",
    EXIT_TOOLING_ERROR: "TOOLING_ERROR",
    EXIT_BLOCK: "BLOCK",
}

# -- Defaults -----------------------------------------------------------------

DEFAULT_TIMEOUT = 30
DEFAULT_TASK = "task"

LOG_LEVEL_ENV_VAR = "EDIT_HOOKS_LOG_LEVEL"

CONTEXT_SETTINGS = {
    "help_option_names": ["--help", "-h"],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}

# Status lines go to stderr; stdout is reserved for the wrapped command.
console = Console(stderr=True, soft_wrap=True, highlight=False)


def parse_timeout(raw: str | None, default: int) -> int:
    """Parse a --timeout value, falling back to default when unusable.

    Unusable means non-numeric, zero, or negative. A zero deadline would
    time out every command, so it is treated like garbage input.
    """
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if value <= 0:
        return default
    return value


def capitalize_first(text: str) -> str:
    """Upper-case the first character only ("lint checks" -> "Lint checks")."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def emit_error(message: str, hint: str | None = None) -> None:
    """Write a human-readable error (and optional hint) to stderr."""
    console.print(f"[red]Error:[/red] {escape(message)}")
    if hint:
        console.print(f"[dim]{escape(hint)}[/dim]")


def emit_progress(label: str, value: str) -> None:
    """Write a labelled progress line to stderr."""
    console.print(f"[cyan]{label}:[/cyan] {escape(value)}")


def configure_logging() -> None:
    """Configure root logging from EDIT_HOOKS_LOG_LEVEL (default WARNING)."""
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def print_usage(usage: str) -> None:
    """Write a plain-text usage block to stderr."""
    console.print(usage, markup=False)


def invoke_app(app: typer.Typer, usage: str) -> NoReturn:
    """Run a typer app as a hook entry point and exit with its code.

    Click reports usage errors with exit 2, which a hook caller reads as
    "block"; those are remapped to EXIT_TOOLING_ERROR.
    """
    configure_logging()
    try:
        exit_code = app(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        print_usage(usage)
        exit_code = EXIT_TOOLING_ERROR
    except click.exceptions.Abort:
        exit_code = EXIT_TOOLING_ERROR
    sys.exit(exit_code or EXIT_SUCCESS)
