"""
Logging utilities for snippet files.

Provides consistent logger naming and a context adapter that tags
records with the file being read.
"""

import logging
from typing import Any


def get_snippet_logger(name: str) -> logging.Logger:
    """
    Get a logger for a snippet file component.

    Args:
        name: Component name (e.g., 'blocks.sequence')

    Returns:
        Logger instance with name 'snippet_files.{name}'
    """
    return logging.getLogger(f"snippet_files.{name}")


class SnippetLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds file context to all log messages.

    Used to tag every record with the snippet file path it concerns.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Add extra context to log record."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def file_logger(name: str, path: str | None) -> SnippetLoggerAdapter:
    """Get a component logger whose records carry `snippet_path`."""
    return SnippetLoggerAdapter(get_snippet_logger(name), {"snippet_path": path})
