# tracey

Building blocks for a terminal coding assistant that traces causal connections
through a codebase. The package has two layers.

The tool layer holds a `ToolRegistry` of named tools and the built-in tools an
agent calls:

- `Read` – read a file with numbered lines (`offset`, `limit`, default 2000 lines)
- `Write` – create or overwrite a file, making parent directories
- `Edit` – replace an exact string, once or with `replace_all`
- `Glob` – list files matching a pattern, sorted
- `Grep` – search contents with `rg`, or `grep` when `rg` is not on PATH
- `Bash` – run a shell command (`timeout` in milliseconds, 120 s by default)

The interface layer holds the state of an interactive session (`tracey.app.App`),
the slash commands it handles, and colour helpers that adapt to the terminal.

## Installation

```
pip install .
```

With what the tests need:

```
pip install .[test]
```

There are no runtime dependencies outside the standard library.

## Running tools through the registry

```python
import asyncio
from pathlib import Path

from tracey.registry import ToolContext, ToolRegistry
from tracey.core_tools import register_core_tools

registry = ToolRegistry()
register_core_tools(registry)

ctx = ToolContext(cwd=Path.cwd())
output = asyncio.run(
    registry.execute("Read", {"file_path": "README.md", "limit": 5}, ctx)
)
print(output.content)
```

`active_schemas()` gives the `ToolSchema` of every tool that is not deferred,
with JSON-schema parameters. `deferred_summaries()` gives the name and
description of each deferred tool, and `tool_names()` lists every name.

`ToolError` is raised for an unknown tool name, a missing required argument, a
file that cannot be read, or a `Bash` command that runs past its timeout. A tool
that runs but fails returns a `ToolOutput` with `is_error` set: for instance an
`Edit` whose string is not found or matches more than once, or a `Bash` command
with a non-zero exit status.

## Session state

`tracey.app.App` keeps the messages, the input line and cursor, the scroll
position, and token and graph counters. Give it:

- key presses as `KeyEvent`s through `handle_key`;
- agent events (`AssistantChunk`, `ToolCallStart`, `ToolCallEnd`, `GraphUpdate`,
  `TurnComplete`, `AgentError`, `StatusEvent`) through `handle_agent_event` or
  `drain_events`;
- a `submit` callable, which receives `UserMessage`, `Interrupt` and `Shutdown`.

`tick()` advances the spinner and returns `True` once the session should end.

Input starting with `/` goes to `tracey.commands.handle_command`, which handles
`/help`, `/clear`, `/compact`, `/cost`, `/status`, `/model`, `/graph`, `/whatif`,
`/commit`, `/diff` and `/quit` locally. `/why` is passed on as a normal message.
`/commit` and `/diff` run `git` in the current directory.

`tracey.messages` has `DisplayMessage`, `MessageRole` and text-trimming helpers.
`tracey.palette`, `tracey.theme` and `tracey.shimmer` pick colours for TrueColor,
256-colour or basic terminals and build styled `Span`s.

## What is not included

The package does not draw a full-screen interface, read the keyboard, or run
an agent or talk to a model. There is no command to start. A front end has to
turn key presses into `KeyEvent`s, pass agent events in, and draw the `App`
state itself.

## Running the tests

```
pytest
```