"""
Shared pytest fixtures for the edit hook programs.

End-to-end tests run each program as ``python -m edit_hooks.<module>`` in a
temporary working directory with an isolated config directory.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent

HookRunner = Callable[..., tuple[int, str, str]]

requires_posix = pytest.mark.skipif(
    os.name != "posix" or shutil.which("echo") is None,
    reason="needs POSIX process groups and coreutils",
)


def py_command(code: str) -> str:
    """Build a whitespace-splittable command that runs code with this interpreter.

    The default tokenizer splits on whitespace, so code must contain none.
    """
    assert not any(ch.isspace() for ch in code), f"code must not contain whitespace: {code!r}"
    assert " " not in sys.executable, "interpreter path must not contain spaces"
    return f"{sys.executable} -c {code}"


# Prints its own arguments. Written without quotes so shlex leaves it intact.
ARGV_PRINTER = py_command("print(__import__(chr(115)+chr(121)+chr(115)).argv[1:])")


def build_env(config_dir: Path, extra: dict[str, str] | None = None) -> dict[str, str]:
    """Environment for a hook subprocess: repo importable, plain output, isolated config."""
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    env["EDIT_HOOKS_CONFIG_DIR"] = str(config_dir)
    env.pop("FORCE_COLOR", None)
    env.pop("EDIT_HOOKS_LOG_LEVEL", None)
    env["NO_COLOR"] = "1"
    if extra:
        env.update(extra)
    return env


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide an empty config directory."""
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Provide the working directory hook subprocesses run in."""
    path = tmp_path / "work"
    path.mkdir()
    return path


def _runner(module: str, workdir: Path, config_dir: Path) -> HookRunner:
    def run(
        args: list[str],
        stdin: str | bytes = b"",
        env: dict[str, str] | None = None,
        timeout: float = 60,
    ) -> tuple[int, str, str]:
        data = stdin.encode("utf-8") if isinstance(stdin, str) else stdin
        result = subprocess.run(
            [sys.executable, "-m", module, *args],
            input=data,
            capture_output=True,
            env=build_env(config_dir, env),
            cwd=str(workdir),
            timeout=timeout,
        )
        return (
            result.returncode,
            result.stdout.decode("utf-8", errors="replace"),
            result.stderr.decode("utf-8", errors="replace"),
        )

    return run


@pytest.fixture
def run_command_cli(workdir: Path, config_dir: Path) -> HookRunner:
    """Run the command runner; returns (returncode, stdout, stderr)."""
    return _runner("edit_hooks.run_command", workdir, config_dir)


@pytest.fixture
def single_file_lint_cli(workdir: Path, config_dir: Path) -> HookRunner:
    """Run the single-file linter; returns (returncode, stdout, stderr)."""
    return _runner("edit_hooks.single_file_lint", workdir, config_dir)
