"""Time-based sweeping highlight across a piece of text."""

from __future__ import annotations

import math
import time

from . import palette
from .palette import Color, ColorLevel, color_level
from .theme import Span, Style

PADDING = 10
SWEEP_SECS = 2.0
BAND = 5.0
HIGHLIGHT = (230, 230, 240)
BASE = (139, 92, 246)

_START = time.monotonic()


def blend(
    fg: tuple[int, int, int], bg: tuple[int, int, int], a: float
) -> tuple[int, int, int]:
    """Mix ``fg`` over ``bg`` with weight ``a``, truncating each channel."""
    return tuple(
        max(0, min(255, int(f * a + b * (1.0 - a)))) for f, b in zip(fg, bg)
    )  # type: ignore[return-value]


def _fallback_style(t: float) -> Style:
    if t < 0.2:
        return Style().dim_()
    if t < 0.6:
        return Style().fg_(palette.violet())
    return Style().fg_(palette.silver()).bold_()


def shimmer_spans(
    text: str, elapsed_secs: float | None = None, level: ColorLevel | None = None
) -> list[Span]:
    """One span per character, lit by a band that sweeps every two seconds."""
    if not text:
        return []
    if elapsed_secs is None:
        elapsed_secs = time.monotonic() - _START
    if level is None:
        level = color_level()

    period = len(text) + PADDING * 2
    pos = int((elapsed_secs % SWEEP_SECS) / SWEEP_SECS * period)
    use_rgb = level is ColorLevel.TRUE_COLOR

    spans = []
    for i, ch in enumerate(text):
        dist = float(abs(i + PADDING - pos))
        t = 0.5 * (1.0 + math.cos(math.pi * dist / BAND)) if dist <= BAND else 0.0
        if use_rgb:
            style = Style().fg_(Color.from_rgb(*blend(HIGHLIGHT, BASE, t * 0.9))).bold_()
        else:
            style = _fallback_style(t)
        spans.append(Span(ch, style))
    return spans