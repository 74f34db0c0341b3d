"""Registration of the built-in tools."""

from __future__ import annotations

from .file_tools import EditTool, GlobTool, ReadTool, WriteTool
from .registry import ToolCategory, ToolEntry, ToolRegistry
from .shell_tools import BashTool, GrepTool


def register_core_tools(registry: ToolRegistry) -> None:
    """Add Read, Write, Edit, Bash, Glob and Grep to ``registry``."""
    entries = [
        ("Read", "Read file contents with line numbers", ToolCategory.FILE_OPS, ReadTool()),
        ("Write", "Create or overwrite a file", ToolCategory.FILE_OPS, WriteTool()),
        ("Edit", "Replace a string in a file", ToolCategory.FILE_OPS, EditTool()),
        ("Bash", "Execute a shell command", ToolCategory.EXECUTION, BashTool()),
        ("Glob", "Find files by pattern", ToolCategory.SEARCH, GlobTool()),
        ("Grep", "Search file contents with regex", ToolCategory.SEARCH, GrepTool()),
    ]
    for name, description, category, handler in entries:
        registry.register(
            ToolEntry(
                name=name,
                description=description,
                category=category,
                handler=handler,
                is_deferred=False,
            )
        )