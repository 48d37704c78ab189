"""
Base class for post-processing passes over generated files.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from ...errors import FormatError, IoError
from ..config import FormatterConfig


class Formatter(ABC):
    """Rewrites generated files in place."""

    # Name used in configuration and error messages
    NAME: str = ""

    def __init__(self, config: FormatterConfig | None = None):
        self.config = config or FormatterConfig()

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the tool can be run in this environment."""

    @abstractmethod
    def format_source(self, source: str) -> str:
        """
        Format one module's source text.

        Raises:
            FormatError: If the tool rejects the source or cannot run
        """

    def format_file(self, path: Path) -> bool:
        """
        Format ``path`` in place.

        Returns:
            True if the file content changed
        """
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise IoError(f"failed to read file `{path}`: {e}") from e

        formatted = self.format_source(source)
        if formatted == source:
            return False

        try:
            path.write_text(formatted, encoding="utf-8")
        except OSError as e:
            raise IoError(f"failed to write file `{path}`: {e}") from e
        return True

    def format_paths(self, paths: Iterable[Path]) -> int:
        """
        Format every path, stopping at the first failure.

        Returns:
            Number of files that changed
        """
        if not self.is_available():
            raise FormatError(f"{self.NAME} is not installed")

        changed = 0
        for path in paths:
            try:
                changed += self.format_file(path)
            except FormatError as e:
                raise e.with_context(f"failed to run {self.NAME} on file {path}")
        return changed
