"""
Streaming snippet reader.

Assembles snippets from a forward-only stream of lines, one snippet
per call, without loading the whole file into memory. The line-level
state machine lives in SnippetAssembler so the same rules apply to
synchronous and asynchronous line sources.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Iterable, Iterator
from enum import Enum
from pathlib import Path

from ..config import SnippetFileConfig
from ..local.file_ops import aiter_lines
from ..logging_utils import file_logger
from .types import END_MARKER, START_MARKER, ReadOutcome, ReadResult, Snippet

logger = logging.getLogger(__name__)


def extract_name(line: str) -> str:
    """Get a snippet name from a start line.

    Every start marker occurrence is removed, then surrounding
    whitespace is trimmed.
    """
    return line.replace(START_MARKER, "").strip()


def join_body(lines: list[str]) -> str:
    """Join body lines with a newline after every line except the last."""
    return "\n".join(lines)


class AssemblerState(Enum):
    """States of the line-level snippet state machine."""

    SEEKING = "seeking"
    COLLECTING = "collecting"


class SnippetAssembler:
    """Line-at-a-time snippet state machine.

    SEEKING ignores lines until one contains the start marker, whose
    remainder becomes the name. COLLECTING stores lines until one
    contains the end marker; the end line itself is discarded. The end
    marker check wins over body content even though it also contains
    the start marker.
    """

    def __init__(self) -> None:
        self.state = AssemblerState.SEEKING
        self._name = ""
        self._lines: list[str] = []

    @property
    def in_block(self) -> bool:
        """True while a started snippet is still waiting for its end line."""
        return self.state is AssemblerState.COLLECTING

    @property
    def pending_name(self) -> str | None:
        """Name of the snippet being collected, if any."""
        return self._name if self.in_block else None

    def feed(self, line: str) -> Snippet | None:
        """Consume one line (terminator already stripped).

        Returns:
            The completed snippet when `line` closes a block, else None
        """
        if self.state is AssemblerState.SEEKING:
            if START_MARKER in line:
                self._name = extract_name(line)
                self._lines = []
                self.state = AssemblerState.COLLECTING
            return None

        if END_MARKER in line:
            snippet = Snippet(name=self._name, body=join_body(self._lines))
            self.state = AssemblerState.SEEKING
            self._name = ""
            self._lines = []
            return snippet

        self._lines.append(line)
        return None


class SnippetReader:
    """Stateful cursor producing at most one snippet per read.

    The cursor is monotonic: lines are never re-read, and once the
    source ends or faults every later read reports END_OF_SEQUENCE.
    An unterminated trailing snippet is dropped.
    """

    def __init__(
        self,
        lines: Iterable[str],
        *,
        on_exhausted: Callable[[], None] | None = None,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            lines: Line source with terminators already stripped
            on_exhausted: Called once when the source is finished with
            log: Logger to report dropped snippets and faults to
        """
        self._lines: Iterator[str] | None = iter(lines)
        self._assembler = SnippetAssembler()
        self._on_exhausted = on_exhausted
        self._log = log or logger
        self.fault_count = 0
        self.last_fault: Exception | None = None

    @property
    def exhausted(self) -> bool:
        return self._lines is None

    def read_next(self) -> ReadResult:
        """Read lines until one snippet is assembled or input ends."""
        if self._lines is None:
            return ReadResult(ReadOutcome.END_OF_SEQUENCE)

        while True:
            try:
                line = next(self._lines)
            except StopIteration:
                if self._assembler.in_block:
                    self._log.debug(
                        f"Dropping unterminated snippet {self._assembler.pending_name!r} "
                        "at end of input"
                    )
                self._exhaust()
                return ReadResult(ReadOutcome.END_OF_SEQUENCE)
            except (OSError, UnicodeDecodeError) as e:
                self.fault_count += 1
                self.last_fault = e
                self._log.warning(f"Line read failed, treating as end of snippets: {e}")
                self._exhaust()
                return ReadResult(ReadOutcome.READ_FAULT, error=e)

            snippet = self._assembler.feed(line)
            if snippet is not None:
                return ReadResult(ReadOutcome.BLOCK, snippet=snippet)

    def close(self) -> None:
        """Stop reading; later reads report END_OF_SEQUENCE."""
        self._exhaust()

    def __iter__(self) -> Iterator[Snippet]:
        while True:
            result = self.read_next()
            if not result.is_block:
                return
            yield result.snippet

    def _exhaust(self) -> None:
        if self._lines is None:
            return
        self._lines = None
        callback, self._on_exhausted = self._on_exhausted, None
        if callback is not None:
            callback()


async def aiter_snippets(
    path: str | Path,
    config: SnippetFileConfig | None = None,
) -> AsyncIterator[Snippet]:
    """Iterate over the snippets of a file using async I/O.

    Follows the same rules as SnippetReader: a read fault or an
    unterminated trailing snippet ends the iteration quietly.

    Args:
        path: Snippet file to read
        config: Optional I/O configuration

    Yields:
        Snippets in file order
    """
    config = config or SnippetFileConfig()
    assembler = SnippetAssembler()
    log = file_logger("blocks.reader", str(path))

    try:
        async for line in aiter_lines(path, config.encoding):
            snippet = assembler.feed(line)
            if snippet is not None:
                yield snippet
    except (OSError, UnicodeDecodeError) as e:
        log.warning(f"Line read failed, treating as end of snippets: {e}")
        return

    if assembler.in_block:
        log.debug(f"Dropping unterminated snippet {assembler.pending_name!r} at end of input")


async def aread_snippets(
    path: str | Path,
    config: SnippetFileConfig | None = None,
) -> list[Snippet]:
    """Read all snippets of a file using async I/O."""
    return [snippet async for snippet in aiter_snippets(path, config)]
