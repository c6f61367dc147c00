"""
Custom exceptions for snippet files.

Only failures at the boundary (opening or writing a file) are raised.
Faults that happen while streaming blocks are absorbed into the end of
the sequence and logged instead.
"""


class SnippetFileError(Exception):
    """Base exception for all snippet file errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SnippetIOError(SnippetFileError):
    """Raised when a snippet file cannot be opened or written."""

    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = f"Snippet file I/O error during {operation}"
        if path:
            message += f": {path}"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause
