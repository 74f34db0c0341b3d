"""Terminal colour capability detection and adaptive colour selection."""

from __future__ import annotations

import enum
import functools
import os
import sys
from dataclasses import dataclass
from typing import ClassVar, Mapping

_NAMED_CODES = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "gray": 37,
    "dark_gray": 90,
    "light_red": 91,
    "light_green": 92,
    "light_yellow": 93,
    "light_blue": 94,
    "light_magenta": 95,
    "light_cyan": 96,
    "white": 97,
}


class ColorLevel(enum.Enum):
    TRUE_COLOR = "truecolor"
    ANSI256 = "ansi256"
    BASIC = "basic"


@dataclass(frozen=True)
class Color:
    """A terminal colour: a named basic colour, an xterm-256 index or RGB."""

    name: str | None = None
    rgb: tuple[int, int, int] | None = None
    index: int | None = None

    BLACK: ClassVar["Color"]
    RED: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    YELLOW: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    MAGENTA: ClassVar["Color"]
    CYAN: ClassVar["Color"]
    GRAY: ClassVar["Color"]
    DARK_GRAY: ClassVar["Color"]
    LIGHT_RED: ClassVar["Color"]
    LIGHT_GREEN: ClassVar["Color"]
    LIGHT_YELLOW: ClassVar["Color"]
    LIGHT_BLUE: ClassVar["Color"]
    LIGHT_MAGENTA: ClassVar["Color"]
    LIGHT_CYAN: ClassVar["Color"]
    WHITE: ClassVar["Color"]

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        for component in (r, g, b):
            if not 0 <= component <= 255:
                raise ValueError(f"colour component out of range: {component}")
        return cls(rgb=(r, g, b))

    @classmethod
    def indexed(cls, index: int) -> "Color":
        if not 0 <= index <= 255:
            raise ValueError(f"colour index out of range: {index}")
        return cls(index=index)

    @classmethod
    def named(cls, name: str) -> "Color":
        if name not in _NAMED_CODES:
            raise ValueError(f"unknown colour name: {name}")
        return cls(name=name)

    def _ansi(self, background: bool) -> str:
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"\x1b[{48 if background else 38};2;{r};{g};{b}m"
        if self.index is not None:
            return f"\x1b[{48 if background else 38};5;{self.index}m"
        code = _NAMED_CODES[self.name or "white"]
        return f"\x1b[{code + 10 if background else code}m"

    def ansi_fg(self) -> str:
        """Escape sequence that sets this colour as the foreground."""
        return self._ansi(False)

    def ansi_bg(self) -> str:
        """Escape sequence that sets this colour as the background."""
        return self._ansi(True)


for _name in _NAMED_CODES:
    setattr(Color, _name.upper(), Color.named(_name))

_FORCED_LEVELS = {"3": ColorLevel.TRUE_COLOR, "2": ColorLevel.ANSI256}


def detect_color_level(environ: Mapping[str, str] | None = None) -> ColorLevel:
    """Work out colour support from terminal environment variables."""
    env = os.environ if environ is None else environ

    force = env.get("FORCE_COLOR")
    if force is not None:
        value = force.strip().lower()
        if value in ("0", "false"):
            return ColorLevel.BASIC
        if value in _FORCED_LEVELS:
            return _FORCED_LEVELS[value]
    elif env.get("NO_COLOR"):
        return ColorLevel.BASIC

    term = env.get("TERM", "")
    if term == "dumb":
        return ColorLevel.BASIC
    if env.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return ColorLevel.TRUE_COLOR
    term_program = env.get("TERM_PROGRAM", "")
    if term_program in ("iTerm.app", "WezTerm"):
        return ColorLevel.TRUE_COLOR
    if term.endswith("-direct") or "truecolor" in term:
        return ColorLevel.TRUE_COLOR
    if "256" in term or term_program == "Apple_Terminal":
        return ColorLevel.ANSI256
    return ColorLevel.BASIC


@functools.lru_cache(maxsize=None)
def color_level() -> ColorLevel:
    """Colour support of standard output, detected once and cached."""
    if "FORCE_COLOR" not in os.environ:
        isatty = getattr(sys.stdout, "isatty", None)
        if isatty is None or not isatty():
            return ColorLevel.BASIC
    return detect_color_level(os.environ)


def best(r: int, g: int, b: int) -> Color:
    """The closest colour the terminal can show for an RGB target."""
    level = color_level()
    if level is ColorLevel.TRUE_COLOR:
        return Color.from_rgb(r, g, b)
    if level is ColorLevel.ANSI256:
        return Color.indexed(closest_256(r, g, b))
    return Color.MAGENTA


def closest_256(r: int, g: int, b: int) -> int:
    """Nearest xterm-256 index: the grayscale ramp or the 6x6x6 cube."""
    gray_avg = (r + g + b) // 3
    if abs(r - g) < 10 and abs(g - b) < 10 and 8 < gray_avg < 238:
        return 232 + min((gray_avg - 8) * 24 // 230, 23)
    return 16 + 36 * color_cube_index(r) + 6 * color_cube_index(g) + color_cube_index(b)


def color_cube_index(v: int) -> int:
    if v <= 47:
        return 0
    if v <= 115:
        return 1
    if v <= 155:
        return 2
    if v <= 195:
        return 3
    if v <= 235:
        return 4
    return 5


def violet() -> Color:
    return best(139, 92, 246)


def silver() -> Color:
    return best(210, 210, 225)


def lavender() -> Color:
    return best(175, 160, 230)


def deep_violet() -> Color:
    return best(85, 50, 190)


def dark_purple() -> Color:
    return best(55, 30, 120)


def chrome_highlight() -> Color:
    return best(230, 230, 240)