"""Tool registry and the types shared by every tool."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping


class ToolError(Exception):
    """Raised when a tool cannot be run or its arguments are unusable."""


@dataclass(frozen=True)
class ToolOutput:
    """The text a tool hands back, flagged as a failure or not."""

    content: str
    is_error: bool = False

    @classmethod
    def success(cls, content: str) -> "ToolOutput":
        return cls(str(content), False)

    @classmethod
    def error(cls, content: str) -> "ToolOutput":
        return cls(str(content), True)


@dataclass(frozen=True)
class ToolSchema:
    """Name, description and JSON-schema parameters offered to a model."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolContext:
    """Where a tool runs."""

    cwd: Path = field(default_factory=Path.cwd)

    def __post_init__(self) -> None:
        self.cwd = Path(self.cwd)


class ToolHandler(abc.ABC):
    """Something that can be called as a tool."""

    @abc.abstractmethod
    async def execute(self, args: Mapping[str, Any], ctx: ToolContext) -> ToolOutput:
        """Run the tool with JSON-like arguments."""

    @abc.abstractmethod
    def schema(self) -> ToolSchema:
        """Describe the tool and its parameters."""


class ToolCategory(enum.Enum):
    FILE_OPS = "file_ops"
    SEARCH = "search"
    EXECUTION = "execution"
    AGENT = "agent"
    CAUSAL = "causal"
    WEB = "web"
    CUSTOM = "custom"


@dataclass
class ToolEntry:
    name: str
    description: str
    category: ToolCategory
    handler: ToolHandler
    is_deferred: bool = False


class ToolRegistry:
    """Tools by name; registering a name again replaces the earlier entry."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolEntry] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def register(self, entry: ToolEntry) -> None:
        self._tools[entry.name] = entry

    def get(self, name: str) -> ToolEntry | None:
        return self._tools.get(name)

    async def execute(
        self, name: str, arguments: Mapping[str, Any], ctx: ToolContext
    ) -> ToolOutput:
        entry = self._tools.get(name)
        if entry is None:
            raise ToolError(f"unknown tool: {name}")
        return await entry.handler.execute(arguments, ctx)

    def active_schemas(self) -> list[ToolSchema]:
        """Schemas of every tool that is not deferred."""
        return [e.handler.schema() for e in self._tools.values() if not e.is_deferred]

    def deferred_summaries(self) -> list[tuple[str, str]]:
        """Name and description of every deferred tool."""
        return [(e.name, e.description) for e in self._tools.values() if e.is_deferred]

    def tool_names(self) -> list[str]:
        return list(self._tools)