import pytest

from tracey import palette, theme
from tracey.palette import Color
from tracey.theme import Span, Style


@pytest.mark.parametrize(
    "index, expected",
    [
        (0, palette.chrome_highlight),
        (1, palette.silver),
        (2, palette.lavender),
        (3, palette.lavender),
        (4, palette.violet),
        (5, palette.violet),
        (6, palette.deep_violet),
        (7, palette.deep_violet),
        (8, palette.dark_purple),
        (9, palette.dark_purple),
        (10, palette.violet),
        (42, palette.violet),
    ],
)
def test_chrome_ramp(index, expected):
    assert theme.chrome(index) == expected()


@pytest.mark.parametrize(
    "conf, expected",
    [
        (1.0, theme.success_color),
        (0.7, theme.success_color),
        (0.69, theme.warning_color),
        (0.4, theme.warning_color),
        (0.39, theme.error_color),
        (0.0, theme.error_color),
    ],
)
def test_confidence_color(conf, expected):
    assert theme.confidence_color(conf) == expected()


def test_named_colours_go_through_palette():
    assert theme.dim_color() == palette.best(120, 120, 135)
    assert theme.error_color() == palette.best(239, 68, 68)
    assert theme.fg_color() == palette.best(230, 230, 235)


def test_style_builders_do_not_mutate():
    base = Style()
    coloured = base.fg_(Color.RED)
    assert base.fg is None
    assert coloured.fg == Color.RED
    bold = coloured.bold_()
    assert not coloured.bold
    assert bold.bold and bold.fg == Color.RED


def test_theme_styles():
    assert theme.user_style() == Style(fg=palette.lavender(), bold=True)
    assert theme.error_style() == Style(fg=theme.error_color(), bold=True)
    assert theme.status_bar_style().bg == palette.dark_purple()
    assert theme.status_bar_style().fg == palette.silver()
    assert theme.border_style().fg == palette.deep_violet()
    assert not theme.assistant_style().bold


def test_span_width_ascii_matches_length():
    text = "session 1 · turn 2"
    assert Span(text).width() == len(text)


def test_span_width_wide_and_combining():
    assert Span("界").width() == 2
    assert Span("e\u0301").width() == 1