import pytest

from tracey.palette import (
    Color,
    ColorLevel,
    best,
    chrome_highlight,
    closest_256,
    color_cube_index,
    color_level,
    detect_color_level,
    violet,
)


@pytest.fixture
def forced(monkeypatch):
    def _force(value):
        monkeypatch.setenv("FORCE_COLOR", value)
        color_level.cache_clear()

    yield _force
    color_level.cache_clear()


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((139, 92, 246), 99),
        ((230, 220, 255), 189),
        ((252, 252, 252), 231),
        ((255, 0, 0), 196),
        ((0, 255, 0), 46),
        ((128, 128, 128), 244),
    ],
)
def test_closest_256(rgb, expected):
    assert closest_256(*rgb) == expected


def test_closest_256_stays_in_range():
    for value in range(0, 256, 5):
        index = closest_256(value, 255 - value, value // 2)
        assert 16 <= index <= 255


def test_grayscale_ramp_used_for_grays():
    for value in range(20, 230, 10):
        assert 232 <= closest_256(value, value, value) <= 255


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (47, 0), (48, 1), (115, 1), (116, 2), (155, 2), (156, 3), (195, 3), (196, 4), (235, 4), (236, 5), (255, 5)],
)
def test_color_cube_index_boundaries(value, expected):
    assert color_cube_index(value) == expected


@pytest.mark.parametrize(
    "env, expected",
    [
        ({"TERM": "xterm-256color"}, ColorLevel.ANSI256),
        ({"TERM": "xterm", "COLORTERM": "truecolor"}, ColorLevel.TRUE_COLOR),
        ({"COLORTERM": "24bit"}, ColorLevel.TRUE_COLOR),
        ({"TERM_PROGRAM": "iTerm.app"}, ColorLevel.TRUE_COLOR),
        ({"TERM_PROGRAM": "Apple_Terminal"}, ColorLevel.ANSI256),
        ({"TERM": "screen-256color", "TMUX": "/tmp/tmux-1000/default"}, ColorLevel.ANSI256),
        ({"TERM": "dumb", "COLORTERM": "truecolor"}, ColorLevel.BASIC),
        ({"NO_COLOR": "1", "COLORTERM": "truecolor"}, ColorLevel.BASIC),
        ({"FORCE_COLOR": "3"}, ColorLevel.TRUE_COLOR),
        ({"FORCE_COLOR": "2", "NO_COLOR": "1"}, ColorLevel.ANSI256),
        ({"FORCE_COLOR": "0", "COLORTERM": "truecolor"}, ColorLevel.BASIC),
        ({}, ColorLevel.BASIC),
    ],
)
def test_detect_color_level(env, expected):
    assert detect_color_level(env) is expected


def test_best_truecolor(forced):
    forced("3")
    assert color_level() is ColorLevel.TRUE_COLOR
    assert best(139, 92, 246) == Color.from_rgb(139, 92, 246)
    assert violet() == Color.from_rgb(139, 92, 246)
    assert chrome_highlight() == Color.from_rgb(230, 230, 240)


def test_best_ansi256(forced):
    forced("2")
    assert best(139, 92, 246) == Color.indexed(99)
    assert best(230, 220, 255) == Color.indexed(189)


def test_best_basic_falls_back_to_magenta(forced):
    forced("0")
    assert best(0, 255, 0) == Color.MAGENTA


def test_ansi_sequences_match_terminal_formats():
    assert Color.from_rgb(139, 92, 246).ansi_fg() == "\x1b[38;2;139;92;246m"
    assert Color.indexed(135).ansi_fg() == "\x1b[38;5;135m"
    assert Color.indexed(55).ansi_bg() == "\x1b[48;5;55m"
    assert Color.MAGENTA.ansi_fg() == "\x1b[35m"
    assert Color.DARK_GRAY.ansi_fg() == "\x1b[90m"


def test_invalid_colours_rejected():
    with pytest.raises(ValueError):
        Color.from_rgb(256, 0, 0)
    with pytest.raises(ValueError):
        Color.indexed(-1)
    with pytest.raises(ValueError):
        Color.named("plaid")