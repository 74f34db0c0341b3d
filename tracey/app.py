"""State and input handling of the interactive terminal session."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterable, Union

from .commands import CommandResult, handle_command
from .messages import DisplayMessage, MessageRole, truncate_lines

MAX_SCROLL = 0xFFFF
DEFAULT_TOKENS_MAX = 200_000
SPINNER_STEPS = 10
TOOL_PREVIEW_LINES = 2


# --- events sent by the agent -------------------------------------------------


@dataclass(frozen=True)
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass(frozen=True)
class AssistantChunk:
    text: str


@dataclass(frozen=True)
class ToolCallStart:
    name: str
    call_id: str = ""


@dataclass(frozen=True)
class ToolCallEnd:
    result: str
    is_error: bool = False
    call_id: str = ""


@dataclass(frozen=True)
class GraphUpdate:
    description: str


@dataclass(frozen=True)
class TurnComplete:
    usage: Usage | None = None


@dataclass(frozen=True)
class AgentError:
    message: str


@dataclass(frozen=True)
class StatusEvent:
    message: str


AgentEvent = Union[
    AssistantChunk, ToolCallStart, ToolCallEnd, GraphUpdate, TurnComplete, AgentError, StatusEvent
]


# --- submissions sent to the agent --------------------------------------------


@dataclass(frozen=True)
class UserMessage:
    content: str
    attachments: tuple[str, ...] = ()


@dataclass(frozen=True)
class Interrupt:
    pass


@dataclass(frozen=True)
class Shutdown:
    pass


Submission = Union[UserMessage, Interrupt, Shutdown]


# --- keyboard input -----------------------------------------------------------


class Key(enum.Enum):
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ESC = "esc"


@dataclass(frozen=True)
class KeyEvent:
    """A key press; ``char`` is set for :attr:`Key.CHAR`."""

    code: Key
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def no_modifiers(self) -> bool:
        return not (self.ctrl or self.alt or self.shift)

    @property
    def ctrl_only(self) -> bool:
        return self.ctrl and not (self.alt or self.shift)


# --- application state --------------------------------------------------------

_DASHBOARD = (
    "╭─◆ tracey ─────────────────────────────────╮\n"
    "│                                            │\n"
    "│  Model:     {model}{model_pad}│\n"
    "│  Provider:  {provider}{provider_pad}│\n"
    "│  Graph:     {graph}{graph_pad}│\n"
    "│  Session:   {session}{session_pad}│\n"
    "│                                            │\n"
    "│  Tools:  Read  Write  Edit  Bash  Glob  Grep│\n"
    "│                                            │\n"
    "│  /help commands · /graph show · /cost       │\n"
    "│  Ctrl+C quit · ↑↓ scroll · Esc interrupt   │\n"
    "│                                            │\n"
    "╰────────────────────────────────────────────╯"
)


def _pad(text: str, width: int) -> str:
    return " " * max(0, width - len(text))


@dataclass
class App:
    """Everything the terminal interface shows, updated by keys and agent events."""

    submit: Callable[[Submission], object] | None = None
    messages: list[DisplayMessage] = field(default_factory=list)
    input: str = ""
    cursor_pos: int = 0
    scroll_offset: int = 0
    status: str = "ready"
    spinner_state: int = 0
    is_processing: bool = False
    should_quit: bool = False
    graph_nodes: int = 0
    graph_edges: int = 0
    graph_last_update: str = ""
    tokens_used: int = 0
    tokens_max: int = DEFAULT_TOKENS_MAX
    model_name: str = ""
    provider_name: str = ""
    session_number: int = 1
    turn_count: int = 0

    def _send(self, submission: Submission) -> None:
        if self.submit is not None:
            self.submit(submission)

    def _push(self, role: MessageRole, content: str, tool_name: str | None = None) -> None:
        self.messages.append(DisplayMessage(role, content, tool_name))

    def inject_welcome_dashboard(self) -> None:
        """Add the welcome dashboard as a system message."""
        graph = f"{self.graph_nodes} nodes, {self.graph_edges} edges"
        session = f"#{self.session_number}"
        content = _DASHBOARD.format(
            model=self.model_name,
            model_pad=_pad(self.model_name, 30),
            provider=self.provider_name,
            provider_pad=_pad(self.provider_name, 30),
            graph=graph,
            graph_pad=_pad(graph, 22),
            session=session,
            session_pad=_pad(session, 30),
        )
        self._push(MessageRole.SYSTEM, content)

    def set_model_info(self, model: str, provider: str) -> None:
        self.model_name = model
        self.provider_name = provider

    def set_graph_stats(self, nodes: int, edges: int) -> None:
        self.graph_nodes = nodes
        self.graph_edges = edges

    def _interrupt(self) -> None:
        self._send(Interrupt())
        self.is_processing = False
        self.status = "interrupted"

    def _submit_input(self) -> None:
        if not self.input.strip():
            return
        text = self.input
        self.input = ""
        self.cursor_pos = 0
        self.scroll_offset = 0

        result = handle_command(self, text)
        if result is CommandResult.QUIT:
            self.should_quit = True
        elif result is CommandResult.NOT_A_COMMAND:
            self._push(MessageRole.USER, text)
            self._send(UserMessage(content=text))
            self.is_processing = True
            self.turn_count += 1
            self.status = "thinking..."

    def _scroll(self, delta: int) -> None:
        self.scroll_offset = max(0, min(MAX_SCROLL, self.scroll_offset + delta))

    def handle_key(self, key: KeyEvent) -> None:
        """Apply one key press to the input line, scrolling or session state."""
        idle = not self.is_processing
        code = key.code

        if code is Key.CHAR and key.char == "c" and key.ctrl_only:
            if self.is_processing:
                self._interrupt()
            else:
                self.should_quit = True
        elif code is Key.ENTER and idle:
            self._submit_input()
        elif code is Key.CHAR and idle:
            self.input = self.input[: self.cursor_pos] + key.char + self.input[self.cursor_pos :]
            self.cursor_pos += len(key.char)
        elif code is Key.BACKSPACE and idle and self.cursor_pos > 0:
            self.cursor_pos -= 1
            self.input = self.input[: self.cursor_pos] + self.input[self.cursor_pos + 1 :]
        elif code is Key.DELETE and idle and self.cursor_pos < len(self.input):
            self.input = self.input[: self.cursor_pos] + self.input[self.cursor_pos + 1 :]
        elif code is Key.LEFT and idle:
            self.cursor_pos = max(0, self.cursor_pos - 1)
        elif code is Key.RIGHT and idle:
            self.cursor_pos = min(self.cursor_pos + 1, len(self.input))
        elif code is Key.HOME and idle:
            self.cursor_pos = 0
        elif code is Key.END and idle:
            self.cursor_pos = len(self.input)
        elif (
            code is Key.UP
            and key.no_modifiers
            and (self.is_processing or not self.input)
        ):
            self._scroll(3)
        elif (
            code is Key.DOWN
            and key.no_modifiers
            and (self.is_processing or not self.input)
        ):
            self._scroll(-3)
        elif code is Key.PAGE_UP:
            self._scroll(20)
        elif code is Key.PAGE_DOWN:
            self._scroll(-20)
        elif code is Key.ESC and self.is_processing:
            self._interrupt()

    def handle_agent_event(self, event: AgentEvent) -> None:
        """Fold one agent event into the conversation and status."""
        match event:
            case AssistantChunk(text=text):
                last = self.messages[-1] if self.messages else None
                if last is not None and last.role is MessageRole.ASSISTANT:
                    last.content += text
                else:
                    self._push(MessageRole.ASSISTANT, text)
                self.scroll_offset = 0
            case ToolCallStart(name=name):
                self.status = f"◆ {name}..."
                self._push(MessageRole.TOOL, f"⧗ {name}...", tool_name=name)
            case ToolCallEnd(result=result, is_error=is_error):
                last = self.messages[-1] if self.messages else None
                if last is not None and last.role is MessageRole.TOOL:
                    name = last.tool_name or ""
                    preview = truncate_lines(result, TOOL_PREVIEW_LINES)
                    mark = "✗" if is_error else "✓"
                    last.content = f"{mark} {name} — {preview}"
            case GraphUpdate(description=description):
                self.graph_last_update = description
                if description.startswith("new:"):
                    self.graph_nodes += 1
                elif description.startswith("edge:"):
                    self.graph_edges += 1
                self._push(MessageRole.GRAPH_UPDATE, description)
            case TurnComplete(usage=usage):
                self.is_processing = False
                if usage is not None:
                    self.tokens_used += usage.input_tokens + usage.output_tokens
                    self.status = (
                        f"turn {self.turn_count} · "
                        f"{usage.input_tokens}↑ {usage.output_tokens}↓"
                    )
                else:
                    self.status = f"turn {self.turn_count} · done"
            case AgentError(message=message):
                self._push(MessageRole.ERROR, message)
                self.is_processing = False
                self.status = "error"
            case StatusEvent(message=message):
                self.status = message
            case _:
                pass

    def drain_events(self, events: Iterable[AgentEvent]) -> None:
        """Handle every pending agent event in order."""
        for event in events:
            self.handle_agent_event(event)

    def tick(self) -> bool:
        """Advance one frame; returns True once the session should end."""
        if self.should_quit:
            self._send(Shutdown())
            return True
        if self.is_processing:
            self.spinner_state = (self.spinner_state + 1) % SPINNER_STEPS
        return False