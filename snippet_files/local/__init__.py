"""
Local file operations.

Line streams for incremental parsing and atomic writes, in
synchronous and aiofiles-based async forms.
"""

from .file_ops import (
    aiter_lines,
    awrite_text_atomic,
    decode_line,
    open_line_stream,
    open_lines,
    strip_line_ending,
    write_text_atomic,
)

__all__ = [
    "open_line_stream",
    "open_lines",
    "strip_line_ending",
    "write_text_atomic",
    "aiter_lines",
    "awrite_text_atomic",
    "decode_line",
]
