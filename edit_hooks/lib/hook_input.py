"""Hook payload parsing for file-edit events.

Only ``tool_input.file_path`` is consumed; every other key in the payload is
ignored.
"""

from __future__ import annotations

import json
from typing import BinaryIO, TypedDict

ALLOWED_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")


class ToolInput(TypedDict, total=False):
    """Tool parameters from the assistant."""
    file_path: str


class HookInput(TypedDict, total=False):
    """JSON input received via stdin."""
    tool_name: str
    tool_input: ToolInput


class HookInputError(Exception):
    """Raised when stdin does not hold a readable JSON document."""


def read_hook_input(stream: BinaryIO) -> HookInput:
    """Read the whole stream as UTF-8 and parse it as one JSON document.

    Raises:
        HookInputError: If the bytes are not UTF-8 or not valid JSON.
    """
    raw = stream.read()
    try:
        text = raw.decode("utf-8")
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise HookInputError(str(e)) from e


def extract_file_path(hook_input: object) -> str | None:
    """Return tool_input.file_path, or None if absent, empty, or not a string."""
    if not isinstance(hook_input, dict):
        return None
    tool_input = hook_input.get("tool_input")
    if not isinstance(tool_input, dict):
        return None
    file_path = tool_input.get("file_path")
    if not isinstance(file_path, str) or not file_path:
        return None
    return file_path


def has_allowed_extension(file_path: str, extensions: tuple[str, ...] = ALLOWED_EXTENSIONS) -> bool:
    """Case-sensitive suffix check ("a.d.ts" matches, "a.TS" does not)."""
    return any(file_path.endswith(ext) for ext in extensions)
