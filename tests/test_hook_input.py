"""Unit tests for hook payload parsing."""

from __future__ import annotations

import io

import pytest

from edit_hooks.lib.hook_input import (
    ALLOWED_EXTENSIONS,
    HookInputError,
    extract_file_path,
    has_allowed_extension,
    read_hook_input,
)


class TestReadHookInput:
    def test_parses_json_object(self) -> None:
        stream = io.BytesIO(b'{"tool_name": "Edit", "tool_input": {"file_path": "src/a.ts"}}')
        assert read_hook_input(stream) == {"tool_name": "Edit", "tool_input": {"file_path": "src/a.ts"}}

    def test_utf8_paths_survive(self) -> None:
        stream = io.BytesIO('{"tool_input": {"file_path": "src/café.ts"}}'.encode("utf-8"))
        assert extract_file_path(read_hook_input(stream)) == "src/café.ts"

    @pytest.mark.parametrize("raw", [b"", b"not json", b'{"tool_input": ', b"\xff\xfe{}"])
    def test_malformed_input_raises(self, raw: bytes) -> None:
        with pytest.raises(HookInputError):
            read_hook_input(io.BytesIO(raw))


class TestExtractFilePath:
    def test_returns_nested_path(self) -> None:
        assert extract_file_path({"tool_input": {"file_path": "a.ts"}}) == "a.ts"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"tool_input": {}},
            {"tool_input": {"file_path": ""}},
            {"tool_input": {"file_path": 42}},
            {"tool_input": "a.ts"},
            {"tool_input": None},
            ["a.ts"],
            "a.ts",
            None,
        ],
        ids=["no-tool-input", "no-file-path", "empty", "not-a-string", "tool-input-string",
             "tool-input-null", "list", "string", "null"],
    )
    def test_missing_or_unusable_path(self, payload: object) -> None:
        assert extract_file_path(payload) is None


class TestHasAllowedExtension:
    @pytest.mark.parametrize("path", ["a.ts", "a.tsx", "a.js", "a.jsx", "src/types.d.ts", "/abs/dir/x.js"])
    def test_allowed(self, path: str) -> None:
        assert has_allowed_extension(path)

    @pytest.mark.parametrize("path", ["a.py", "a.TS", "a.Js", "a.json", "a.mjs", "ts", "a.ts.bak", "Makefile"])
    def test_not_allowed(self, path: str) -> None:
        assert not has_allowed_extension(path)

    def test_allow_list_is_fixed(self) -> None:
        assert ALLOWED_EXTENSIONS == (".ts", ".tsx", ".js", ".jsx")
