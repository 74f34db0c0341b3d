from pathlib import Path

import pytest

from tracey.file_tools import EditTool, GlobTool, ReadTool, WriteTool, resolve_path
from tracey.registry import ToolContext, ToolError


@pytest.fixture
def ctx(tmp_path):
    return ToolContext(tmp_path)


def test_resolve_path_relative_and_absolute(tmp_path):
    assert resolve_path("a/b.txt", tmp_path) == tmp_path / "a" / "b.txt"
    assert resolve_path("/etc/hosts", tmp_path) == Path("/etc/hosts")


@pytest.mark.asyncio
async def test_read_numbers_lines(ctx, tmp_path):
    (tmp_path / "f.txt").write_text("alpha\nbeta\ngamma\n")
    out = await ReadTool().execute({"file_path": "f.txt"}, ctx)
    assert not out.is_error
    assert out.content == "1\talpha\n2\tbeta\n3\tgamma"


@pytest.mark.asyncio
async def test_read_offset_and_limit(ctx, tmp_path):
    (tmp_path / "f.txt").write_text("alpha\nbeta\ngamma\ndelta")
    out = await ReadTool().execute({"file_path": "f.txt", "offset": 1, "limit": 2}, ctx)
    assert out.content == "2\tbeta\n3\tgamma"


@pytest.mark.asyncio
async def test_read_offset_past_end(ctx, tmp_path):
    (tmp_path / "f.txt").write_text("alpha\n")
    out = await ReadTool().execute({"file_path": "f.txt", "offset": 10}, ctx)
    assert out.content == ""
    assert not out.is_error


@pytest.mark.asyncio
async def test_read_strips_carriage_returns(ctx, tmp_path):
    (tmp_path / "f.txt").write_bytes(b"one\r\ntwo\r\n")
    out = await ReadTool().execute({"file_path": "f.txt"}, ctx)
    assert out.content == "1\tone\n2\ttwo"


@pytest.mark.asyncio
async def test_read_missing_file(ctx, tmp_path):
    out = await ReadTool().execute({"file_path": "nope.txt"}, ctx)
    assert out.is_error
    assert out.content == f"File not found: {tmp_path / 'nope.txt'}"


@pytest.mark.asyncio
async def test_read_requires_path(ctx):
    with pytest.raises(ToolError, match="file_path required"):
        await ReadTool().execute({}, ctx)


@pytest.mark.asyncio
async def test_write_creates_parents(ctx, tmp_path):
    content = "hello world"
    out = await WriteTool().execute({"file_path": "deep/dir/x.txt", "content": content}, ctx)
    target = tmp_path / "deep" / "dir" / "x.txt"
    assert target.read_text() == content
    assert out.content == f"File written: {target} ({len(content.encode())} bytes)"


@pytest.mark.asyncio
async def test_write_requires_content(ctx):
    with pytest.raises(ToolError, match="content required"):
        await WriteTool().execute({"file_path": "x.txt"}, ctx)


@pytest.mark.asyncio
async def test_edit_unique_match(ctx, tmp_path):
    target = tmp_path / "e.txt"
    target.write_text("foo bar baz")
    out = await EditTool().execute(
        {"file_path": str(target), "old_string": "bar", "new_string": "qux"}, ctx
    )
    assert out.content == f"Edited {target}"
    assert target.read_text() == "foo qux baz"


@pytest.mark.asyncio
async def test_edit_ambiguous_match_refused(ctx, tmp_path):
    target = tmp_path / "e.txt"
    target.write_text("x x")
    out = await EditTool().execute(
        {"file_path": "e.txt", "old_string": "x", "new_string": "y"}, ctx
    )
    assert out.is_error
    assert out.content.startswith("old_string matches 2 times in")
    assert target.read_text() == "x x"


@pytest.mark.asyncio
async def test_edit_replace_all(ctx, tmp_path):
    target = tmp_path / "e.txt"
    target.write_text("x x")
    out = await EditTool().execute(
        {"file_path": "e.txt", "old_string": "x", "new_string": "y", "replace_all": True}, ctx
    )
    assert not out.is_error
    assert target.read_text() == "y y"


@pytest.mark.asyncio
async def test_edit_not_found(ctx, tmp_path):
    target = tmp_path / "e.txt"
    target.write_text("abc")
    out = await EditTool().execute(
        {"file_path": "e.txt", "old_string": "zzz", "new_string": "y"}, ctx
    )
    assert out.is_error
    assert out.content == f"old_string not found in {target}"


@pytest.mark.asyncio
async def test_edit_missing_file_raises(ctx):
    with pytest.raises(ToolError, match="read"):
        await EditTool().execute(
            {"file_path": "absent.txt", "old_string": "a", "new_string": "b"}, ctx
        )


@pytest.mark.asyncio
async def test_glob_sorted_and_recursive(ctx, tmp_path):
    (tmp_path / "sub").mkdir()
    for name in ["b.py", "a.py", "sub/c.py", "d.txt"]:
        (tmp_path / name).write_text("")
    out = await GlobTool().execute({"pattern": "**/*.py"}, ctx)
    lines = out.content.split("\n")
    assert lines == sorted(lines)
    assert set(lines) == {str(tmp_path / n) for n in ["a.py", "b.py", "sub/c.py"]}


@pytest.mark.asyncio
async def test_glob_with_path_argument(tmp_path):
    (tmp_path / "one.md").write_text("")
    out = await GlobTool().execute(
        {"pattern": "*.md", "path": str(tmp_path)}, ToolContext("/")
    )
    assert out.content == str(tmp_path / "one.md")


@pytest.mark.asyncio
async def test_glob_no_match(ctx):
    out = await GlobTool().execute({"pattern": "*.nothing"}, ctx)
    assert out.content == "No files matched."
    assert not out.is_error


def test_schemas_name_required_fields():
    assert ReadTool().schema().parameters["required"] == ["file_path"]
    assert WriteTool().schema().parameters["required"] == ["file_path", "content"]
    assert EditTool().schema().parameters["required"] == ["file_path", "old_string", "new_string"]
    assert GlobTool().schema().name == "Glob"