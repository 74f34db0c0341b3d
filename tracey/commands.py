"""Slash commands handled locally by the terminal interface."""

from __future__ import annotations

import enum
import math
import subprocess
from pathlib import Path
from typing import Any, Callable

from .messages import DisplayMessage, MessageRole

HELP_TEXT = """## Commands

### Session
  /clear, /reset     — Clear conversation and start fresh
  /compact [focus]    — Compress conversation context
  /commit [msg]       — Git commit all changes
  /diff               — Show uncommitted changes
  /quit, /exit        — Exit Tracey

### Info
  /help               — Show this help
  /cost, /usage       — Show token usage and estimated cost
  /status             — Show session info
  /model [name]       — Show or switch model

### Causal Graph
  /graph show         — Display the causal graph
  /graph impact <file> — Show what's affected by changing a file
  /graph stats        — Show graph statistics
  /graph search <q>   — Search graph nodes
  /graph export <fmt>  — Export graph (mermaid/dot/json)
  /why <error>        — Trace root cause through causal graph
  /whatif edit <file>  — Predict impact of editing a file

### Shortcuts
  Ctrl+C              — Interrupt / Quit
  Esc                 — Interrupt current generation
  Ctrl+U              — Clear input
  ↑↓ / PgUp/PgDn     — Scroll conversation"""

DEFAULT_COMMIT_MESSAGE = "tracey: auto-commit"


class CommandResult(enum.Enum):
    HANDLED = "handled"
    NOT_A_COMMAND = "not_a_command"
    QUIT = "quit"


def _push(app: Any, role: MessageRole, content: str) -> None:
    app.messages.append(DisplayMessage(role, content))


def _percent(used: int, maximum: int) -> float:
    if maximum == 0:
        return math.nan if used == 0 else math.inf
    return used / maximum * 100.0


def _or(value: str, fallback: str) -> str:
    return value if value else fallback


def estimate_cost(model: str, tokens: int) -> float:
    """Rough dollar cost of ``tokens`` for a model, averaging input and output rates."""
    if "opus" in model:
        per_million = 15.0 + 75.0
    elif "sonnet" in model:
        per_million = 3.0 + 15.0
    elif "haiku" in model:
        per_million = 0.25 + 1.25
    elif "gpt-4o" in model:
        per_million = 2.5 + 10.0
    else:
        per_million = 5.0
    return (tokens / 1_000_000.0) * (per_million / 2.0)


def _cmd_help(app: Any, _args: str) -> None:
    _push(app, MessageRole.SYSTEM, HELP_TEXT)


def _cmd_clear(app: Any, _args: str) -> None:
    app.messages.clear()
    app.scroll_offset = 0
    app.tokens_used = 0
    app.turn_count = 0
    _push(app, MessageRole.SYSTEM, "Conversation cleared. Starting fresh.")


def _cmd_compact(app: Any, focus: str) -> None:
    text = f"Compacting with focus: {focus}" if focus else "Compacting conversation..."
    _push(app, MessageRole.SYSTEM, text)


def _cmd_cost(app: Any, _args: str) -> None:
    cost = estimate_cost(app.model_name, app.tokens_used)
    content = (
        "## Token Usage\n"
        "\n"
        f"Tokens used: {app.tokens_used}\n"
        f"Estimated cost: ${cost:.4f}\n"
        f"Model: {_or(app.model_name, 'unknown')}\n"
        f"Turns: {app.turn_count}\n"
        f"Context capacity: {_percent(app.tokens_used, app.tokens_max):.0f}%"
    )
    _push(app, MessageRole.SYSTEM, content)


def _cmd_model(app: Any, name: str) -> None:
    if not name:
        _push(app, MessageRole.SYSTEM, f"Current model: {_or(app.model_name, 'not set')}")
    else:
        app.model_name = name
        _push(app, MessageRole.SYSTEM, f"Model switched to: {name}")


def _cmd_graph(app: Any, args: str) -> None:
    parts = args.split(" ", 1)
    subcmd = parts[0].lower()
    subargs = parts[1] if len(parts) > 1 else ""

    if subcmd in ("", "show"):
        _push(
            app,
            MessageRole.GRAPH_UPDATE,
            f"Graph: {app.graph_nodes} nodes, {app.graph_edges} edges\n"
            "(Use /graph stats for detailed breakdown, "
            "/graph impact <file> for impact analysis)",
        )
    elif subcmd == "stats":
        _push(
            app,
            MessageRole.GRAPH_UPDATE,
            "## Graph Statistics\n"
            "\n"
            f"Total: {app.graph_nodes} nodes, {app.graph_edges} edges\n"
            f"Session: {app.session_number} (turn {app.turn_count})\n"
            f"Last update: {_or(app.graph_last_update, 'none')}",
        )
    elif subcmd == "impact":
        if not subargs:
            _push(app, MessageRole.ERROR, "Usage: /graph impact <file>")
        else:
            _push(app, MessageRole.GRAPH_UPDATE, f"Analyzing impact of: {subargs}...")
    elif subcmd == "search":
        if not subargs:
            _push(app, MessageRole.ERROR, "Usage: /graph search <query>")
        else:
            _push(app, MessageRole.GRAPH_UPDATE, f"Searching graph for: {subargs}...")
    elif subcmd == "export":
        fmt = subargs if subargs else "json"
        _push(app, MessageRole.SYSTEM, f"Exporting graph as {fmt}...")
    else:
        _push(
            app,
            MessageRole.ERROR,
            f"Unknown graph command: {subcmd}. Try: show, stats, impact, search, export",
        )


def _cmd_whatif(app: Any, args: str) -> None:
    if not args:
        _push(app, MessageRole.ERROR, "Usage: /whatif edit <file>")
    else:
        _push(app, MessageRole.GRAPH_UPDATE, f"What-if analysis: {args}...")


def _cmd_status(app: Any, _args: str) -> None:
    content = (
        "## Status\n"
        "\n"
        f"Model: {_or(app.model_name, 'not set')}\n"
        f"Provider: {_or(app.provider_name, 'not set')}\n"
        f"Session: #{app.session_number}\n"
        f"Turns: {app.turn_count}\n"
        f"Graph: {app.graph_nodes} nodes, {app.graph_edges} edges\n"
        f"Tokens: {app.tokens_used} / {app.tokens_max} "
        f"({_percent(app.tokens_used, app.tokens_max):.0f}%)\n"
        f"Last graph update: {_or(app.graph_last_update, 'none')}"
    )
    _push(app, MessageRole.SYSTEM, content)


def _run_git(cwd: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args], cwd=str(cwd), capture_output=True, text=True, check=False
    )


def _git_commit(cwd: Path, message: str) -> str:
    try:
        for argv in (("add", "-A"), ("commit", "-m", message)):
            proc = _run_git(cwd, *argv)
            if proc.returncode != 0:
                raise RuntimeError(proc.stderr.strip() or proc.stdout.strip() or "git failed")
    except OSError as exc:
        raise RuntimeError(str(exc)) from exc
    first = proc.stdout.strip().splitlines()
    return first[0] if first else message


def _git_diff(cwd: Path) -> str | None:
    try:
        proc = _run_git(cwd, "diff")
    except OSError:
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout


def _cmd_commit(app: Any, message: str) -> None:
    msg = message if message else DEFAULT_COMMIT_MESSAGE
    try:
        output = _git_commit(Path.cwd(), msg)
    except RuntimeError as exc:
        _push(app, MessageRole.ERROR, f"commit failed: {exc}")
    else:
        _push(app, MessageRole.SYSTEM, f"✓ Committed: {output}")


def _cmd_diff(app: Any, _args: str) -> None:
    diff = _git_diff(Path.cwd())
    if diff is None:
        _push(app, MessageRole.ERROR, "Not a git repository")
    else:
        _push(app, MessageRole.SYSTEM, f"## Git Diff\n\n```\n{diff}\n```")


_HANDLERS: dict[str, Callable[[Any, str], None]] = {
    "/help": _cmd_help,
    "/h": _cmd_help,
    "/?": _cmd_help,
    "/clear": _cmd_clear,
    "/reset": _cmd_clear,
    "/new": _cmd_clear,
    "/compact": _cmd_compact,
    "/cost": _cmd_cost,
    "/usage": _cmd_cost,
    "/tokens": _cmd_cost,
    "/model": _cmd_model,
    "/graph": _cmd_graph,
    "/whatif": _cmd_whatif,
    "/status": _cmd_status,
    "/commit": _cmd_commit,
    "/diff": _cmd_diff,
}

_PASS_THROUGH = frozenset({"/why"})
_QUIT = frozenset({"/quit", "/exit", "/q"})


def handle_command(app: Any, input_text: str) -> CommandResult:
    """Run a slash command against ``app``; plain text is left for the model."""
    text = input_text.strip()
    if not text.startswith("/"):
        return CommandResult.NOT_A_COMMAND

    parts = text.split(" ", 1)
    cmd = parts[0].lower()
    args = parts[1].strip() if len(parts) > 1 else ""

    if cmd in _PASS_THROUGH:
        return CommandResult.NOT_A_COMMAND
    if cmd in _QUIT:
        return CommandResult.QUIT

    handler = _HANDLERS.get(cmd)
    if handler is None:
        _push(
            app,
            MessageRole.ERROR,
            f"Unknown command: {cmd}. Type /help for available commands.",
        )
    else:
        handler(app, args)
    return CommandResult.HANDLED