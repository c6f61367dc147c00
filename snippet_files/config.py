"""
Configuration for reading and writing snippet files.

Settings can come from the environment or from a YAML settings file:

```yaml
snippet_files:
  encoding: "utf-8"
```
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ENCODING_ENV_VAR = "SNIPPET_FILES_ENCODING"


@dataclass
class SnippetFileConfig:
    """Configuration for snippet file I/O."""

    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> SnippetFileConfig:
        """Create config from environment variables."""
        return cls(encoding=os.environ.get(ENCODING_ENV_VAR, "utf-8"))

    @classmethod
    def from_yaml(cls, path: str | Path) -> SnippetFileConfig:
        """Create config from the `snippet_files` section of a YAML file.

        A missing file, or one without a `snippet_files` mapping, yields
        the defaults.
        """
        config_path = Path(path)
        if not config_path.exists():
            logger.debug(f"No settings file at {config_path}, using defaults")
            return cls()

        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        section = data.get("snippet_files") if isinstance(data, dict) else None
        if not isinstance(section, dict):
            logger.debug(f"No snippet_files mapping in {config_path}, using defaults")
            return cls()
        return cls(encoding=section.get("encoding", "utf-8"))
