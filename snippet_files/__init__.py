"""
Snippet Files

Reads and writes snippet files: plain text files holding named
multi-line blocks.

    -- greeting --
    Hello,
    world
    -- end --

Files are parsed incrementally, one snippet per request, so large
files are never loaded into memory at once.

Usage:

    >>> from snippet_files import Snippet, SnippetSequence
    >>> with SnippetSequence.read("notes.snip") as snippets:
    ...     snippets.append(Snippet("extra", "added in memory"))
    ...     for snippet in snippets:
    ...         print(snippet.name)
    ...
    ...     # Random access re-reads the file
    ...     greeting = snippets.find_by_name("greeting")
    ...     text = snippets.serialize()

Async callers:

    from snippet_files import aread_snippets
    snippets = await aread_snippets("notes.snip")
"""

from .blocks import (
    END_MARKER,
    START_MARKER,
    IterationPhase,
    ReadOutcome,
    ReadResult,
    Snippet,
    SnippetAssembler,
    SnippetReader,
    SnippetSequence,
    aiter_snippets,
    aread_snippets,
)
from .config import SnippetFileConfig
from .exceptions import SnippetFileError, SnippetIOError
from .logging_utils import SnippetLoggerAdapter, get_snippet_logger

__all__ = [
    # Core types
    "Snippet",
    "SnippetSequence",
    "IterationPhase",
    # Streaming
    "SnippetReader",
    "SnippetAssembler",
    "ReadOutcome",
    "ReadResult",
    "aiter_snippets",
    "aread_snippets",
    "START_MARKER",
    "END_MARKER",
    # Configuration
    "SnippetFileConfig",
    # Exceptions
    "SnippetFileError",
    "SnippetIOError",
    # Logging
    "SnippetLoggerAdapter",
    "get_snippet_logger",
]

__version__ = "0.1.0"
