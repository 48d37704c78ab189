"""
Black formatter, used as a library.
"""

from __future__ import annotations

from ...errors import FormatError
from .base import Formatter


class BlackFormatter(Formatter):
    """Formats source text with ``black.format_str``."""

    NAME = "black"

    def __init__(self, config=None):
        super().__init__(config)
        self._black = None
        self._mode = None

    def is_available(self) -> bool:
        if self._black is None:
            try:
                import black
            except ImportError:
                return False
            self._black = black
        return True

    def mode(self):
        """The black Mode matching the configuration."""
        if self._mode is None:
            black = self._black
            target_versions = set()
            if self.config.target_version:
                # Unknown targets fall back to the newest version black knows
                version = getattr(black.TargetVersion, self.config.target_version.upper(), None)
                target_versions.add(version or max(black.TargetVersion, key=lambda v: v.value))

            self._mode = black.Mode(
                target_versions=target_versions,
                line_length=self.config.line_length,
                string_normalization=self.config.string_normalization,
                magic_trailing_comma=self.config.magic_trailing_comma,
            )
        return self._mode

    def format_source(self, source: str) -> str:
        if not self.is_available():
            raise FormatError("black is not installed")
        try:
            return self._black.format_str(source, mode=self.mode())
        except self._black.InvalidInput as e:
            raise FormatError(f"black could not parse the generated code: {e}") from e
