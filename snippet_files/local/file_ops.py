"""
Line-oriented file operations for snippet files.

Provides:
- Line streams split on `\n` and decoded per line, for incremental parsing
- Atomic writes using temp file + rename
- Async equivalents built on aiofiles
"""

import os
import tempfile
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

import aiofiles
import aiofiles.os

from ..exceptions import SnippetIOError


def strip_line_ending(line: str) -> str:
    """Remove a trailing `\\n` or `\\r\\n` from a raw line."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def decode_line(raw: bytes, encoding: str = "utf-8") -> str:
    """Decode one raw `\\n`-terminated line and strip its terminator.

    Lines are split on `\\n` only; a lone `\\r` stays part of the line.
    """
    return strip_line_ending(raw.decode(encoding))


def _iter_decoded(handle: BinaryIO, encoding: str) -> Iterator[str]:
    # A bad byte faults on its own line, after every earlier line
    for raw in handle:
        yield decode_line(raw, encoding)


def open_line_stream(path: str | Path, encoding: str = "utf-8") -> tuple[BinaryIO, Iterator[str]]:
    """Open a file for incremental line reading.

    The caller owns the returned handle and must close it.

    Args:
        path: File to open
        encoding: Text encoding; an undecodable line faults when reached

    Returns:
        Tuple of (handle, iterator over decoded, stripped lines)
    """
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise SnippetIOError("open", str(path), e) from e
    return handle, _iter_decoded(handle, encoding)


@contextmanager
def open_lines(path: str | Path, encoding: str = "utf-8") -> Iterator[Iterator[str]]:
    """Context manager yielding stripped lines of a file.

    The handle is released when the context exits.
    """
    handle, lines = open_line_stream(path, encoding)
    with handle:
        yield lines


def write_text_atomic(path: str | Path, text: str, encoding: str = "utf-8") -> None:
    """Write a text file atomically using temp file + rename.

    Args:
        path: Target path
        text: Full file contents, written without newline translation
        encoding: Text encoding
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SnippetIOError("create_directory", str(path.parent), e) from e

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".tmp_",
        suffix=path.suffix or ".snip",
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, path)
    except (OSError, UnicodeEncodeError) as e:
        # Clean up temp file on error
        try:
            os.remove(temp_path)
        except OSError:
            pass
        raise SnippetIOError("write", str(path), e) from e


async def aiter_lines(path: str | Path, encoding: str = "utf-8") -> AsyncIterator[str]:
    """Iterate over stripped lines of a file without loading it into memory.

    Open failures raise SnippetIOError; faults while reading propagate
    unchanged so the caller can decide how to treat them.
    """
    try:
        f = await aiofiles.open(path, "rb")
    except OSError as e:
        raise SnippetIOError("open", str(path), e) from e

    try:
        async for raw in f:
            yield decode_line(raw, encoding)
    finally:
        await f.close()


async def awrite_text_atomic(path: str | Path, text: str, encoding: str = "utf-8") -> None:
    """Async version of write_text_atomic."""
    path = Path(path)
    try:
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
    except OSError as e:
        raise SnippetIOError("create_directory", str(path.parent), e) from e

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".tmp_",
        suffix=path.suffix or ".snip",
    )
    try:
        os.close(fd)
        async with aiofiles.open(temp_path, "w", encoding=encoding, newline="") as f:
            await f.write(text)
            await f.flush()
            os.fsync(f.fileno())

        await aiofiles.os.replace(temp_path, path)
    except (OSError, UnicodeEncodeError) as e:
        try:
            await aiofiles.os.remove(temp_path)
        except OSError:
            pass
        raise SnippetIOError("write", str(path), e) from e
