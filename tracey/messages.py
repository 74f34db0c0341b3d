"""Chat messages as shown in the terminal interface, and text trimming helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime


class MessageRole(enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    ERROR = "error"
    GRAPH_UPDATE = "graph_update"
    SYSTEM = "system"


def now_time() -> str:
    """Local wall-clock time as ``HH:MM``."""
    return datetime.now().strftime("%H:%M")


@dataclass
class DisplayMessage:
    """One entry in the conversation view."""

    role: MessageRole
    content: str
    tool_name: str | None = None
    timestamp: str = field(default_factory=now_time)


def _text_lines(s: str) -> list[str]:
    parts = s.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def truncate_lines(s: str, max_lines: int) -> str:
    """Join the first ``max_lines`` lines with spaces, marking any cut with ``...``."""
    lines = _text_lines(s)
    result = " ".join(lines[:max_lines])
    if len(lines) > max_lines:
        return f"{result}..."
    return result


def truncate_str(s: str, max_len: int) -> str:
    """Cut ``s`` to ``max_len`` characters, ending in ``...`` when there is room."""
    if len(s) <= max_len:
        return s
    if max_len > 3:
        return f"{s[:max_len - 3]}..."
    return s[:max_len]