"""
Unified snippet sequence.

Combines a streaming reader over a snippet file with an in-memory
list of manually added snippets, exposed as one forward-only sequence:
file snippets first, then in-memory snippets.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO

from ..config import SnippetFileConfig
from ..local.file_ops import open_line_stream, open_lines, write_text_atomic
from ..logging_utils import file_logger
from .reader import SnippetReader
from .types import Snippet


class IterationPhase(Enum):
    """Phases of a sequence's iteration session.

    Transitions only go forward: STREAMING -> REPLAYING -> EXHAUSTED.
    """

    STREAMING = "streaming"
    REPLAYING = "replaying"
    EXHAUSTED = "exhausted"


class SnippetSequence:
    """A snippet file, or a set of snippets that can be written as one.

    Three ways to build a sequence:

        SnippetSequence()                       # empty
        SnippetSequence.read("notes.snip")      # streamed from a file
        SnippetSequence.from_snippets(snippets) # in memory only

    Iteration (`next_snippet()` or the iterator protocol) pulls one
    snippet at a time from the file. Once the file is exhausted it
    replays the in-memory snippets, then stays exhausted. The random
    access methods (`collect_all`, `find_by_name`, `serialize`) re-read
    the file from scratch and never move the iteration cursor.

    Not thread-safe: a single consumer is assumed.
    """

    def __init__(
        self,
        snippets: Iterable[Snippet] | None = None,
        *,
        config: SnippetFileConfig | None = None,
    ) -> None:
        """Initialize an in-memory sequence.

        Args:
            snippets: Initial in-memory snippets, in iteration order
            config: Optional I/O configuration
        """
        self.path: Path | None = None
        self.config = config or SnippetFileConfig()
        self._snippets: list[Snippet] = [replace(snippet) for snippet in snippets or ()]
        self._handle: BinaryIO | None = None
        self._reader: SnippetReader | None = None
        self._phase = IterationPhase.REPLAYING
        self._replay_index = 0
        self._log = file_logger("blocks.sequence", None)

    @classmethod
    def read(
        cls,
        path: str | Path,
        config: SnippetFileConfig | None = None,
    ) -> SnippetSequence:
        """Open a snippet file for streaming.

        Args:
            path: Snippet file to read
            config: Optional I/O configuration

        Returns:
            A sequence that streams the file's snippets

        Raises:
            SnippetIOError: If the file cannot be opened
        """
        config = config or SnippetFileConfig()
        handle, lines = open_line_stream(path, config.encoding)

        sequence = cls(config=config)
        sequence.path = Path(path)
        sequence._handle = handle
        sequence._log = file_logger("blocks.sequence", str(path))
        sequence._reader = SnippetReader(
            lines,
            on_exhausted=sequence._release_stream,
            log=sequence._log,
        )
        sequence._phase = IterationPhase.STREAMING
        sequence._log.debug(f"Opened snippet file {path} for streaming")
        return sequence

    @classmethod
    def from_snippets(
        cls,
        snippets: Iterable[Snippet],
        config: SnippetFileConfig | None = None,
    ) -> SnippetSequence:
        """Create an in-memory sequence holding the given snippets."""
        return cls(snippets, config=config)

    @property
    def phase(self) -> IterationPhase:
        return self._phase

    @property
    def fault_count(self) -> int:
        """Number of line read faults absorbed while streaming."""
        return self._reader.fault_count if self._reader is not None else 0

    def append(self, snippet: Snippet) -> None:
        """Add a snippet after every snippet already in the sequence.

        Never touches the file. The snippet is seen by an iteration
        still streaming, or replaying but not yet past its position.
        """
        self._snippets.append(replace(snippet))

    def next_snippet(self) -> Snippet | None:
        """Get the next snippet, or None once the sequence is exhausted.

        Reads from the file until it is exhausted, then replays the
        in-memory snippets. Returns copies; the sequence's own state is
        never aliased.
        """
        if self._phase is IterationPhase.STREAMING and self._reader is not None:
            result = self._reader.read_next()
            if result.is_block:
                return result.snippet
            self._phase = IterationPhase.REPLAYING
            self._log.debug(f"Snippet stream ended ({result.outcome.value}), replaying in-memory snippets")

        if self._phase is IterationPhase.REPLAYING:
            if self._replay_index < len(self._snippets):
                snippet = self._snippets[self._replay_index]
                self._replay_index += 1
                return replace(snippet)
            self._phase = IterationPhase.EXHAUSTED

        return None

    def __iter__(self) -> SnippetSequence:
        return self

    def __next__(self) -> Snippet:
        snippet = self.next_snippet()
        if snippet is None:
            raise StopIteration
        return snippet

    def collect_all(self) -> list[Snippet]:
        """Get every snippet: file snippets first, then in-memory ones.

        The file is re-read from scratch through an independent handle
        that is closed before returning.

        Raises:
            SnippetIOError: If the file can no longer be opened
        """
        in_memory = [replace(snippet) for snippet in self._snippets]
        if self.path is None:
            return in_memory

        with open_lines(self.path, self.config.encoding) as lines:
            file_snippets = list(SnippetReader(lines, log=self._log))
        return file_snippets + in_memory

    def find_by_name(self, name: str) -> Snippet | None:
        """Get the first snippet whose name equals `name` exactly.

        Duplicate names are allowed; only the first match is returned.
        """
        for snippet in self.collect_all():
            if snippet.name == name:
                return snippet
        return None

    def serialize(self) -> str:
        """Render every snippet in the on-disk format, each followed by a newline."""
        return "".join(f"{snippet.render()}\n" for snippet in self.collect_all())

    def save(self, path: str | Path) -> None:
        """Write the serialized sequence to `path` atomically.

        Raises:
            SnippetIOError: If the file cannot be written
        """
        write_text_atomic(path, self.serialize(), self.config.encoding)
        self._log.debug(f"Saved snippet sequence to {path}")

    def close(self) -> None:
        """Release the streaming file handle.

        Iteration continues as if the file had been exhausted.
        """
        if self._reader is not None:
            self._reader.close()

    def __enter__(self) -> SnippetSequence:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __str__(self) -> str:
        return self.serialize()

    def _release_stream(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._log.debug("Released snippet file handle")
