"""Subprocess execution patterns shared by the hook programs.

Provides:
  Timer            - Elapsed time context manager
  split_command    - Command string to argv
  run_with_timeout - Captured subprocess run with a hard deadline
  relay_result     - Forward captured child streams to the parent streams
"""

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

logger = logging.getLogger(__name__)

# POSIX children get their own session so a timeout can take down the whole tree.
_USE_PROCESS_GROUP = os.name == "posix"

# Seconds to drain output after a kill before the pipes are abandoned.
_REAP_GRACE_SECONDS = 2


class CommandTimeout(Exception):
    """Raised when the wrapped command does not finish before its deadline."""

    def __init__(self, argv: list[str], timeout: int) -> None:
        super().__init__(f"Command timed out after {timeout}s: {' '.join(argv)}")
        self.argv = argv
        self.timeout = timeout


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one command run."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


# -- Timer --------------------------------------------------------------------


class Timer:
    """Context manager for elapsed time tracking.

    Usage:
        with Timer() as t:
            do_work()
        print(t.elapsed_ms)
    """

    def __init__(self) -> None:
        self._start: float = 0.0
        self._end: float | None = None

    def __enter__(self) -> Timer:
        self._start = time.monotonic()
        return self

    def __exit__(self, *_: object) -> None:
        self._end = time.monotonic()

    @property
    def elapsed_ms(self) -> int:
        """Elapsed milliseconds (final after exit, running if still in context)."""
        end = self._end if self._end is not None else time.monotonic()
        return int((end - self._start) * 1000)


# -- Command splitting --------------------------------------------------------


def split_command(command: str, shell_split: bool = False) -> list[str]:
    """Split a command string into executable and arguments.

    Default is a plain whitespace split: quotes are NOT honoured, so
    ``eslint --rule "a b"`` yields four tokens. Existing hook configurations
    rely on this. With shell_split, shlex rules apply instead.

    Raises:
        ValueError: If shell_split is set and the string cannot be tokenized.
    """
    if shell_split:
        return shlex.split(command)
    return command.split()


# -- Subprocess execution -----------------------------------------------------


def _kill_tree(proc: subprocess.Popen[str]) -> None:
    """Kill the child and, on POSIX, every process in its group."""
    if _USE_PROCESS_GROUP:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except PermissionError:
            pass
    proc.kill()


def _reap(proc: subprocess.Popen[str]) -> None:
    """Collect a killed child without waiting on pipes held by escaped descendants."""
    try:
        proc.communicate(timeout=_REAP_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        # a descendant in another session still holds the pipes open
        logger.debug("pipes still open after kill; closing them")
        for stream in (proc.stdout, proc.stderr):
            if stream is not None:
                stream.close()
        proc.wait()


def run_with_timeout(
    argv: list[str],
    *,
    timeout: int,
    cwd: Path | None = None,
) -> CommandResult:
    """Run argv with captured stdout/stderr, waiting at most timeout seconds.

    Output is decoded as UTF-8; undecodable bytes are replaced.

    Returns:
        CommandResult with the child's exit code and both streams.

    Raises:
        CommandTimeout: If the deadline passes. The child tree is killed first;
            descendants that left the session are not waited for.
        OSError: If the executable cannot be started (not found, not executable).
    """
    logger.debug("spawning %r (timeout=%ss, cwd=%s)", argv, timeout, cwd or Path.cwd())
    proc = subprocess.Popen(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        text=True,
        encoding="utf-8",
        errors="replace",
        start_new_session=_USE_PROCESS_GROUP,
    )
    with Timer() as t:
        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_tree(proc)
            _reap(proc)
            logger.debug("killed %r after %sms", argv, t.elapsed_ms)
            raise CommandTimeout(argv, timeout) from None
        except KeyboardInterrupt:
            _kill_tree(proc)
            proc.wait()
            raise
    logger.debug("%r exited with %s in %sms", argv, proc.returncode, t.elapsed_ms)
    return CommandResult(exit_code=proc.returncode, stdout=stdout or "", stderr=stderr or "")


def relay_result(result: CommandResult, console: Console) -> None:
    """Forward child stdout verbatim to stdout and child stderr, with a header, to stderr."""
    if result.stdout:
        sys.stdout.write(result.stdout)
        sys.stdout.flush()
    if result.stderr:
        console.print("[red]Command errors:[/red]")
        sys.stderr.write(result.stderr)
        sys.stderr.flush()
