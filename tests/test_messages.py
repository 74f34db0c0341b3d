import re
from datetime import datetime

import pytest

from tracey.messages import (
    DisplayMessage,
    MessageRole,
    now_time,
    truncate_lines,
    truncate_str,
)


def test_now_time_is_current_hours_and_minutes():
    before = datetime.now()
    result = now_time()
    after = datetime.now()
    assert result in {before.strftime("%H:%M"), after.strftime("%H:%M")}


def test_display_message_defaults():
    msg = DisplayMessage(MessageRole.USER, "hi")
    assert msg.tool_name is None
    assert re.fullmatch(r"\d\d:\d\d", msg.timestamp)
    assert msg.role is MessageRole.USER
    assert msg.content == "hi"


def test_display_message_content_is_mutable():
    msg = DisplayMessage(MessageRole.ASSISTANT, "par")
    msg.content += "tial"
    assert msg.content == "partial"


def test_truncate_lines_short_text_unchanged():
    assert truncate_lines("one\ntwo", 2) == "one two"


def test_truncate_lines_marks_cut():
    result = truncate_lines("one\ntwo\nthree", 2)
    assert result == "one two..."
    assert "three" not in result


def test_truncate_lines_ignores_trailing_newline():
    assert truncate_lines("one\ntwo\n", 2) == "one two"


def test_truncate_lines_strips_carriage_returns():
    assert truncate_lines("a\r\nb\r\n", 5) == "a b"


def test_truncate_lines_empty():
    assert truncate_lines("", 2) == ""


def test_truncate_str_fits():
    assert truncate_str("hello", 5) == "hello"
    assert truncate_str("hello", 50) == "hello"


@pytest.mark.parametrize("max_len", [4, 6, 8, 10])
def test_truncate_str_long_text_ends_in_ellipsis(max_len):
    text = "hello world, how are you"
    result = truncate_str(text, max_len)
    assert len(result) == max_len
    assert result.endswith("...")
    assert text.startswith(result[:-3])


@pytest.mark.parametrize("max_len", [0, 1, 2, 3])
def test_truncate_str_tiny_limit_has_no_ellipsis(max_len):
    text = "abcdefgh"
    assert truncate_str(text, max_len) == text[:max_len]