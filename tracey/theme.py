"""Colours, styles and styled text spans used by the terminal interface."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field, replace

from . import palette
from .palette import Color, lavender, silver, violet

__all__ = [
    "Style",
    "Span",
    "chrome",
    "violet",
    "silver",
    "lavender",
    "dim_color",
    "error_color",
    "success_color",
    "warning_color",
    "fg_color",
    "confidence_color",
]


@dataclass(frozen=True)
class Style:
    """Foreground, background and text modifiers; methods return new styles."""

    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    dim: bool = False
    underlined: bool = False

    def fg_(self, color: Color) -> "Style":
        return replace(self, fg=color)

    def bg_(self, color: Color) -> "Style":
        return replace(self, bg=color)

    def bold_(self) -> "Style":
        return replace(self, bold=True)

    def dim_(self) -> "Style":
        return replace(self, dim=True)

    def underlined_(self) -> "Style":
        return replace(self, underlined=True)


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


@dataclass(frozen=True)
class Span:
    """A piece of text drawn in one style."""

    text: str
    style: Style = field(default_factory=Style)

    def width(self) -> int:
        """Number of terminal cells the text occupies."""
        return sum(_char_width(ch) for ch in self.text)


_CHROME = (
    palette.chrome_highlight,
    palette.silver,
    palette.lavender,
    palette.lavender,
    palette.violet,
    palette.violet,
    palette.deep_violet,
    palette.deep_violet,
    palette.dark_purple,
    palette.dark_purple,
)


def chrome(i: int) -> Color:
    """Colour ``i`` of the chrome ramp, from highlight down to dark purple."""
    if 0 <= i < len(_CHROME):
        return _CHROME[i]()
    return palette.violet()


def dim_color() -> Color:
    return palette.best(120, 120, 135)


def error_color() -> Color:
    return palette.best(239, 68, 68)


def success_color() -> Color:
    return palette.best(34, 197, 94)


def warning_color() -> Color:
    return palette.best(234, 179, 8)


def fg_color() -> Color:
    return palette.best(230, 230, 235)


def user_style() -> Style:
    return Style().fg_(lavender()).bold_()


def assistant_style() -> Style:
    return Style().fg_(fg_color())


def tool_style() -> Style:
    return Style().fg_(dim_color())


def error_style() -> Style:
    return Style().fg_(error_color()).bold_()


def border_style() -> Style:
    return Style().fg_(palette.deep_violet())


def active_border_style() -> Style:
    return Style().fg_(violet())


def graph_update_style() -> Style:
    return Style().fg_(lavender())


def status_bar_style() -> Style:
    return Style().fg_(silver()).bg_(palette.dark_purple())


def header_style() -> Style:
    return Style().fg_(silver()).bg_(palette.dark_purple())


def confidence_color(conf: float) -> Color:
    if conf >= 0.7:
        return success_color()
    if conf >= 0.4:
        return warning_color()
    return error_color()


# Plain ANSI escapes for output written outside the full-screen interface.
ANSI_VIOLET = "\x1b[35m"
ANSI_BRIGHT_VIOLET = "\x1b[1;95m"
ANSI_CYAN = "\x1b[36m"
ANSI_DIM = "\x1b[90m"
ANSI_WHITE = "\x1b[1;37m"
ANSI_GREEN = "\x1b[32m"
ANSI_RED = "\x1b[31m"
ANSI_YELLOW = "\x1b[33m"
ANSI_BOLD = "\x1b[1m"
ANSI_RESET = "\x1b[0m"

# Fixed colours that render the same on every terminal.
CHROME = (Color.MAGENTA,) * 12
DIM = Color.DARK_GRAY
FG = Color.WHITE
ERROR = Color.RED
SUCCESS = Color.GREEN
WARNING = Color.YELLOW
VIOLET = Color.MAGENTA
VIOLET_BRIGHT = Color.LIGHT_MAGENTA
VIOLET_DIM = Color.DARK_GRAY
LAVENDER = Color.LIGHT_MAGENTA
CHROME_HIGHLIGHT = Color.WHITE
CHROME_SHADOW = Color.DARK_GRAY
VIOLET_MUTED = Color.DARK_GRAY

ANSI_CHROME = (
    "\x1b[37m", "\x1b[37m", "\x1b[95m", "\x1b[95m",
    "\x1b[35m", "\x1b[35m", "\x1b[90m", "\x1b[90m",
    "\x1b[90m", "\x1b[90m", "\x1b[90m", "\x1b[90m",
)