"""
Snippet types and delimiter constants.

A snippet file is a sequence of named multi-line blocks:

    -- <name> --
    <body lines>
    -- end --
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Substring that opens a block while seeking
START_MARKER = "--"

# Substring that closes a block while collecting
END_MARKER = "-- end --"


@dataclass
class Snippet:
    """A named multi-line text block.

    Attributes:
        name: Identifying name (not required to be unique)
        body: Text content, without the delimiter lines
    """

    name: str
    body: str = ""

    def append(self, text: str) -> None:
        """Append text to the body. No separator is inserted."""
        self.body += text

    def get_string(self) -> str:
        """Get the body text."""
        return self.body

    def render(self) -> str:
        """Render in the on-disk format, without a trailing newline."""
        return f"-- {self.name} --\n{self.body}\n{END_MARKER}"

    def __str__(self) -> str:
        return self.render()


class ReadOutcome(Enum):
    """Result kinds of a single block read."""

    BLOCK = "block"
    END_OF_SEQUENCE = "end_of_sequence"
    # Consumers treat a fault exactly like END_OF_SEQUENCE
    READ_FAULT = "read_fault"


@dataclass
class ReadResult:
    """Outcome of one reader step.

    Attributes:
        outcome: What the step produced
        snippet: The assembled snippet for BLOCK outcomes
        error: The underlying exception for READ_FAULT outcomes
    """

    outcome: ReadOutcome
    snippet: Snippet | None = None
    error: Exception | None = None

    @property
    def is_block(self) -> bool:
        return self.outcome is ReadOutcome.BLOCK
