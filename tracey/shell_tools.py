"""Tools that run shell commands and search file contents."""

from __future__ import annotations

import asyncio
import os
import shutil
import signal
from typing import Any, Mapping

from .registry import ToolContext, ToolError, ToolHandler, ToolOutput, ToolSchema

MAX_OUTPUT_CHARS = 50_000
MAX_GREP_LINES = 250
DEFAULT_TIMEOUT_SECS = 120.0


def which(cmd: str) -> bool:
    """Whether ``cmd`` can be found on PATH."""
    return shutil.which(cmd) is not None


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
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except (AttributeError, ProcessLookupError, PermissionError):
        try:
            proc.kill()
        except ProcessLookupError:
            pass


class BashTool(ToolHandler):
    """Run a shell command in the context directory."""

    def __init__(self, default_timeout: float = DEFAULT_TIMEOUT_SECS) -> None:
        self.default_timeout = default_timeout

    async def execute(self, args: Mapping[str, Any], ctx: ToolContext) -> ToolOutput:
        command = _require_str(args, "command")
        timeout_ms = _as_count(args.get("timeout"))
        timeout = timeout_ms / 1000 if timeout_ms is not None else self.default_timeout

        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                cwd=str(ctx.cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as exc:
            raise ToolError(f"failed to start command: {exc}") from exc

        try:
            raw_out, raw_err = await asyncio.wait_for(proc.communicate(), timeout)
        except asyncio.TimeoutError:
            _kill(proc)
            await proc.wait()
            raise ToolError(f"command timed out after {timeout:g}s") from None

        stdout = raw_out.decode("utf-8", errors="replace")
        stderr = raw_err.decode("utf-8", errors="replace")
        output = "\n".join(part for part in (stdout, stderr) if part)

        if len(output) > MAX_OUTPUT_CHARS:
            output = output[:MAX_OUTPUT_CHARS] + "\n... (output truncated)"

        if proc.returncode != 0:
            return ToolOutput.error(f"Exit code: {proc.returncode}\n{output}")
        return ToolOutput.success(output)

    def schema(self) -> ToolSchema:
        return ToolSchema(
            name="Bash",
            description="Execute a shell command and return its output.",
            parameters={
                "type": "object",
                "properties": {
                    "command": {"type": "string", "description": "The command to execute"},
                    "timeout": {
                        "type": "integer",
                        "description": "Timeout in milliseconds (default 120000)",
                    },
                },
                "required": ["command"],
            },
        )


class GrepTool(ToolHandler):
    """Search file contents with ripgrep, or grep when ripgrep is absent."""

    async def execute(self, args: Mapping[str, Any], ctx: ToolContext) -> ToolOutput:
        pattern = _require_str(args, "pattern")
        path_arg = args.get("path")
        path = path_arg if isinstance(path_arg, str) else str(ctx.cwd)
        mode = args.get("output_mode")
        if not isinstance(mode, str):
            mode = "files_with_matches"
        ignore_case = args.get("-i") is True

        if which("rg"):
            argv = ["rg", "--no-heading"]
            argv.append({"files_with_matches": "-l", "count": "-c"}.get(mode, "-n"))
            file_glob = args.get("glob")
            if isinstance(file_glob, str):
                argv += ["--glob", file_glob]
        else:
            argv = ["grep", "-r", "-n"]
            if mode == "files_with_matches":
                argv.append("-l")
        if ignore_case:
            argv.append("-i")
        argv += [pattern, path]

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
            raw_out, _ = await proc.communicate()
        except OSError as exc:
            raise ToolError(f"grep failed: {exc}") from exc

        result = raw_out.decode("utf-8", errors="replace")
        return ToolOutput.success("\n".join(_lines(result)[:MAX_GREP_LINES]))

    def schema(self) -> ToolSchema:
        return ToolSchema(
            name="Grep",
            description="Search file contents with regex.",
            parameters={
                "type": "object",
                "properties": {
                    "pattern": {"type": "string", "description": "Regex pattern to search for"},
                    "path": {"type": "string", "description": "File or directory to search"},
                    "output_mode": {
                        "type": "string",
                        "enum": ["content", "files_with_matches", "count"],
                        "description": "Output mode",
                    },
                    "glob": {"type": "string", "description": "File glob filter"},
                    "-i": {"type": "boolean", "description": "Case insensitive"},
                },
                "required": ["pattern"],
            },
        )