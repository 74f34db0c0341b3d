"""Tools that read, write, edit and find files."""

from __future__ import annotations

import glob as _glob
from pathlib import Path
from typing import Any, Mapping

from .registry import ToolContext, ToolError, ToolHandler, ToolOutput, ToolSchema

DEFAULT_READ_LIMIT = 2000


def resolve_path(file_path: str, cwd: Path | str) -> Path:
    """Absolute paths are kept; anything else is taken relative to ``cwd``."""
    if file_path.startswith("/"):
        return Path(file_path)
    return Path(cwd) / file_path


def _require_str(args: Mapping[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str):
        raise ToolError(f"{key} required")
    return value


def _as_count(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


def _lines(text: str) -> list[str]:
    """Split on newlines, dropping one trailing empty line and any trailing CR."""
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _read_text(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ToolError(f"read {path}: {exc}") from exc


class ReadTool(ToolHandler):
    """Read a file and number its lines."""

    async def execute(self, args: Mapping[str, Any], ctx: ToolContext) -> ToolOutput:
        path = resolve_path(_require_str(args, "file_path"), ctx.cwd)
        if not path.exists():
            return ToolOutput.error(f"File not found: {path}")

        lines = _lines(_read_text(path))
        offset = _as_count(args.get("offset")) or 0
        limit = _as_count(args.get("limit"))
        if limit is None:
            limit = DEFAULT_READ_LIMIT

        selected = lines[offset : offset + limit]
        numbered = "\n".join(
            f"{number}\t{line}" for number, line in enumerate(selected, start=offset + 1)
        )
        return ToolOutput.success(numbered)

    def schema(self) -> ToolSchema:
        return ToolSchema(
            name="Read",
            description="Read a file's contents with line numbers.",
            parameters={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Absolute path to the file to read",
                    },
                    "offset": {
                        "type": "integer",
                        "description": "Line number to start from (0-indexed)",
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Max lines to read (default 2000)",
                    },
                },
                "required": ["file_path"],
            },
        )


class WriteTool(ToolHandler):
    """Create or overwrite a file, making parent directories as needed."""

    async def execute(self, args: Mapping[str, Any], ctx: ToolContext) -> ToolOutput:
        path = resolve_path(_require_str(args, "file_path"), ctx.cwd)
        content = _require_str(args, "content")

        path.parent.mkdir(parents=True, exist_ok=True)
        data = content.encode("utf-8")
        path.write_bytes(data)
        return ToolOutput.success(f"File written: {path} ({len(data)} bytes)")

    def schema(self) -> ToolSchema:
        return ToolSchema(
            name="Write",
            description="Write content to a file, creating it if needed.",
            parameters={
                "type": "object",
                "properties": {
                    "file_path": {"type": "string", "description": "Absolute path to the file"},
                    "content": {"type": "string", "description": "Content to write"},
                },
                "required": ["file_path", "content"],
            },
        )


class EditTool(ToolHandler):
    """Replace an exact string in a file."""

    async def execute(self, args: Mapping[str, Any], ctx: ToolContext) -> ToolOutput:
        file_path = _require_str(args, "file_path")
        old_string = _require_str(args, "old_string")
        new_string = _require_str(args, "new_string")
        replace_all = args.get("replace_all") is True

        path = resolve_path(file_path, ctx.cwd)
        content = _read_text(path)

        if old_string not in content:
            return ToolOutput.error(f"old_string not found in {path}")

        if not replace_all:
            count = content.count(old_string)
            if count > 1:
                return ToolOutput.error(
                    f"old_string matches {count} times in {path}. "
                    "Provide more context or use replace_all."
                )

        new_content = content.replace(old_string, new_string, -1 if replace_all else 1)
        path.write_bytes(new_content.encode("utf-8"))
        return ToolOutput.success(f"Edited {path}")

    def schema(self) -> ToolSchema:
        return ToolSchema(
            name="Edit",
            description="Replace a string in a file.",
            parameters={
                "type": "object",
                "properties": {
                    "file_path": {"type": "string", "description": "Absolute path to the file"},
                    "old_string": {
                        "type": "string",
                        "description": "Exact string to find and replace",
                    },
                    "new_string": {"type": "string", "description": "Replacement string"},
                    "replace_all": {
                        "type": "boolean",
                        "description": "Replace all occurrences (default false)",
                    },
                },
                "required": ["file_path", "old_string", "new_string"],
            },
        )


class GlobTool(ToolHandler):
    """List files that match a glob pattern, sorted."""

    async def execute(self, args: Mapping[str, Any], ctx: ToolContext) -> ToolOutput:
        pattern = _require_str(args, "pattern")
        base_arg = args.get("path")
        base = Path(base_arg) if isinstance(base_arg, str) else ctx.cwd

        full_pattern = str(base / pattern)
        try:
            matches = sorted(_glob.glob(full_pattern, recursive=True))
        except (ValueError, OSError) as exc:
            raise ToolError(f"invalid glob: {exc}") from exc

        if not matches:
            return ToolOutput.success("No files matched.")
        return ToolOutput.success("\n".join(matches))

    def schema(self) -> ToolSchema:
        return ToolSchema(
            name="Glob",
            description="Find files matching a glob pattern.",
            parameters={
                "type": "object",
                "properties": {
                    "pattern": {
                        "type": "string",
                        "description": "Glob pattern (e.g. '**/*.rs')",
                    },
                    "path": {"type": "string", "description": "Directory to search in"},
                },
                "required": ["pattern"],
            },
        )