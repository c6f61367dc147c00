"""Tests for line streams, atomic writes and the async reader."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from snippet_files import Snippet, SnippetFileConfig, SnippetIOError, aiter_snippets, aread_snippets
from snippet_files.local.file_ops import (
    aiter_lines,
    awrite_text_atomic,
    decode_line,
    open_line_stream,
    open_lines,
    strip_line_ending,
    write_text_atomic,
)


class TestStripLineEnding:
    def test_lf(self) -> None:
        assert strip_line_ending("text\n") == "text"

    def test_crlf(self) -> None:
        assert strip_line_ending("text\r\n") == "text"

    def test_no_terminator(self) -> None:
        assert strip_line_ending("text") == "text"

    def test_only_one_terminator(self) -> None:
        assert strip_line_ending("text\n\n") == "text\n"

    def test_lone_cr_kept(self) -> None:
        assert strip_line_ending("text\r") == "text\r"


class TestLineStreams:
    """Tests for synchronous line streams."""

    def test_open_lines(self, write_snippet_file: Callable[..., Path]) -> None:
        path = write_snippet_file("one\ntwo\n\nfour")
        with open_lines(path) as lines:
            assert list(lines) == ["one", "two", "", "four"]

    def test_crlf_file(self, write_snippet_file: Callable[..., Path]) -> None:
        path = write_snippet_file(b"-- a --\r\nL1\r\nL2\r\n-- end --\r\n")
        with open_lines(path) as lines:
            assert list(lines) == ["-- a --", "L1", "L2", "-- end --"]

    def test_lone_cr_is_not_a_line_break(self, write_snippet_file: Callable[..., Path]) -> None:
        """Lines split on `\\n` only."""
        path = write_snippet_file(b"a\rb\nc\r\n")
        with open_lines(path) as lines:
            assert list(lines) == ["a\rb", "c"]

    def test_decode_fault_after_earlier_lines(self, write_snippet_file: Callable[..., Path]) -> None:
        """A bad byte faults on its own line, after the lines before it."""
        path = write_snippet_file(b"good\n\xff\nlater\n")
        with open_lines(path) as lines:
            assert next(lines) == "good"
            with pytest.raises(UnicodeDecodeError):
                next(lines)

    def test_decode_line(self) -> None:
        assert decode_line("é\r\n".encode("latin-1"), "latin-1") == "é"

    def test_open_lines_releases_handle(self, write_snippet_file: Callable[..., Path]) -> None:
        path = write_snippet_file("x\n")
        with open_lines(path) as lines:
            next(lines)
        with pytest.raises(ValueError):
            next(lines)

    def test_open_line_stream_caller_owns_handle(self, write_snippet_file: Callable[..., Path]) -> None:
        handle, lines = open_line_stream(write_snippet_file("a\nb\n"))
        try:
            assert next(lines) == "a"
            assert not handle.closed
        finally:
            handle.close()

    def test_open_missing(self, tmp_path: Path) -> None:
        with pytest.raises(SnippetIOError) as exc_info:
            with open_lines(tmp_path / "nope.snip"):
                pass
        assert exc_info.value.details["operation"] == "open"
        assert "nope.snip" in exc_info.value.message


class TestWriteTextAtomic:
    """Tests for atomic writes."""

    def test_write(self, tmp_path: Path) -> None:
        path = tmp_path / "out.snip"
        write_text_atomic(path, "-- a --\nb\n-- end --\n")
        assert path.read_bytes() == b"-- a --\nb\n-- end --\n"

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        path = tmp_path / "out.snip"
        write_text_atomic(path, "first")
        write_text_atomic(path, "second")

        assert path.read_text(encoding="utf-8") == "second"
        assert [p.name for p in tmp_path.iterdir()] == ["out.snip"]

    def test_encode_failure_cleans_up(self, tmp_path: Path) -> None:
        path = tmp_path / "out.snip"

        with pytest.raises(SnippetIOError) as exc_info:
            write_text_atomic(path, "snowman ☃", encoding="ascii")

        assert exc_info.value.operation == "write"
        assert list(tmp_path.iterdir()) == []


class TestAsyncFileOps:
    """Tests for the aiofiles-based helpers."""

    @pytest.mark.asyncio
    async def test_aiter_lines(self, write_snippet_file: Callable[..., Path]) -> None:
        path = write_snippet_file("one\r\ntwo\n")
        assert [line async for line in aiter_lines(path)] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_aiter_lines_missing(self, tmp_path: Path) -> None:
        with pytest.raises(SnippetIOError):
            async for _ in aiter_lines(tmp_path / "missing.snip"):
                pass

    @pytest.mark.asyncio
    async def test_awrite_text_atomic(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "out.snip"
        await awrite_text_atomic(path, "-- a --\nb\n-- end --\n")

        assert path.read_text(encoding="utf-8") == "-- a --\nb\n-- end --\n"
        assert [p.name for p in path.parent.iterdir()] == ["out.snip"]

    @pytest.mark.asyncio
    async def test_aread_snippets(self, snippet_file: Path, reference_snippets: list[Snippet]) -> None:
        assert await aread_snippets(snippet_file) == reference_snippets

    @pytest.mark.asyncio
    async def test_aiter_snippets_drops_unterminated(self, write_snippet_file: Callable[..., Path]) -> None:
        path = write_snippet_file("-- a --\nx\n-- end --\n-- b --\nopen")
        assert [s async for s in aiter_snippets(path)] == [Snippet("a", "x")]

    @pytest.mark.asyncio
    async def test_aiter_snippets_read_fault(self, write_snippet_file: Callable[..., Path]) -> None:
        """An undecodable line ends the iteration without raising."""
        path = write_snippet_file(b"-- a --\nx\n-- end --\n\xff\xfe\n-- b --\ny\n-- end --\n")
        assert await aread_snippets(path) == [Snippet("a", "x")]

    @pytest.mark.asyncio
    async def test_aiter_lines_keeps_lone_cr(self, write_snippet_file: Callable[..., Path]) -> None:
        path = write_snippet_file(b"a\rb\r\nc\n")
        assert [line async for line in aiter_lines(path)] == ["a\rb", "c"]

    @pytest.mark.asyncio
    async def test_aread_snippets_with_config(self, write_snippet_file: Callable[..., Path]) -> None:
        path = write_snippet_file("-- é --\nà\n-- end --\n".encode("latin-1"))
        snippets = await aread_snippets(path, SnippetFileConfig(encoding="latin-1"))
        assert snippets == [Snippet("é", "à")]

    @pytest.mark.asyncio
    async def test_aread_snippets_missing(self, tmp_path: Path) -> None:
        with pytest.raises(SnippetIOError):
            await aread_snippets(tmp_path / "missing.snip")
