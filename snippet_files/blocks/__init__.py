"""
Snippet block model.

A snippet file is read incrementally, one named block at a time,
and can be merged with snippets added in memory.
"""

from .reader import (
    AssemblerState,
    SnippetAssembler,
    SnippetReader,
    aiter_snippets,
    aread_snippets,
    extract_name,
    join_body,
)
from .sequence import IterationPhase, SnippetSequence
from .types import END_MARKER, START_MARKER, ReadOutcome, ReadResult, Snippet

__all__ = [
    # Snippet types
    "Snippet",
    "ReadOutcome",
    "ReadResult",
    "START_MARKER",
    "END_MARKER",
    # Streaming reader
    "AssemblerState",
    "SnippetAssembler",
    "SnippetReader",
    "extract_name",
    "join_body",
    "aiter_snippets",
    "aread_snippets",
    # Unified sequence
    "IterationPhase",
    "SnippetSequence",
]
