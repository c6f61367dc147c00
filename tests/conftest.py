"""
Shared test configuration and fixtures.

Provides the reference snippet file and a helper for writing
ad-hoc snippet files into a temporary directory.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from snippet_files import Snippet

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def snippet_file() -> Path:
    """Path to the reference file holding three snippets."""
    return FIXTURES_DIR / "snippet_test.snip"


@pytest.fixture
def reference_snippets() -> list[Snippet]:
    """The snippets stored in the reference file, in file order."""
    return [
        Snippet("snippet1", "Are we human?\nOr are we dancer?"),
        Snippet("snippet2", "This is my church.\nThis is where I heal my hurts."),
        Snippet(
            "snippet3 with space",
            "Never gonna give you up\n"
            "Never gonna let you down\n"
            "Never gonna run around and desert you\n"
            "\n"
            "Never gonna make you cry\n"
            "Never gonna say goodbye\n"
            "Never gonna tell a lie and hurt you\n",
        ),
    ]


@pytest.fixture
def write_snippet_file(tmp_path: Path) -> Callable[..., Path]:
    """
    Fixture returning a helper that writes raw content to a temp file.

    Text is written without newline translation; bytes are written as-is.
    """

    def _write(content: str | bytes, name: str = "test.snip") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return _write
