"""Optional user configuration for the edit hook programs."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from rich.markup import escape

from . import DEFAULT_TIMEOUT, console

CONFIG_DIR = Path(os.environ.get("EDIT_HOOKS_CONFIG_DIR", Path.home() / ".agents" / "edit-hooks"))
CONFIG_FILE = CONFIG_DIR / "config.yml"


@dataclass(frozen=True)
class HookSettings:
    """Defaults applied when the command line leaves a value unset."""

    timeout: int = DEFAULT_TIMEOUT
    shell_split: bool = False


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from ~/.agents/edit-hooks/config.yml (or path)."""
    config_file = path or CONFIG_FILE
    if not config_file.is_file():
        return {}
    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        console.print(f"[yellow]Warning:[/yellow] Config parse error: {escape(str(e))}")
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        console.print(f"[yellow]Warning:[/yellow] Config must be a mapping: {escape(str(config_file))}")
        return {}
    return data


def load_settings(path: Path | None = None) -> HookSettings:
    """Resolve HookSettings from the config file, warning on bad values.

    Priority (applied by callers): command line > config file > built-in defaults.
    """
    config = load_config(path)
    settings = HookSettings()

    timeout = config.get("timeout", settings.timeout)
    # bool is an int subclass; reject it explicitly
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        console.print(
            f"[yellow]Warning:[/yellow] timeout must be a positive int, got {escape(repr(timeout))}; "
            f"using {DEFAULT_TIMEOUT}"
        )
        timeout = DEFAULT_TIMEOUT

    shell_split = config.get("shell_split", settings.shell_split)
    if not isinstance(shell_split, bool):
        console.print(f"[yellow]Warning:[/yellow] shell_split must be bool, got {escape(repr(shell_split))}")
        shell_split = False

    return HookSettings(timeout=timeout, shell_split=shell_split)
