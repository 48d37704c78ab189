"""
Ruff formatter, run as a subprocess.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from ...errors import FormatError, IoError
from .base import Formatter


class RuffFormatter(Formatter):
    """Runs ``ruff format`` on each written file."""

    NAME = "ruff"

    def __init__(self, config=None):
        super().__init__(config)
        self._available = None

    def is_available(self) -> bool:
        if self._available is None:
            try:
                result = subprocess.run(["ruff", "--version"], capture_output=True, text=True, timeout=5)
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, OSError):
                self._available = False
        return self._available

    def command(self, *args: str) -> list[str]:
        """Build a ``ruff format`` command line from the configuration."""
        cmd = ["ruff", "format", "--line-length", str(self.config.line_length)]
        if self.config.target_version:
            cmd.extend(["--target-version", self.config.target_version])
        if not self.config.string_normalization:
            cmd.extend(["--config", "format.quote-style='preserve'"])
        if not self.config.magic_trailing_comma:
            cmd.extend(["--config", "format.skip-magic-trailing-comma=true"])
        cmd.extend(args)
        return cmd

    def format_source(self, source: str) -> str:
        return self._run(self.command("--stdin-filename", "generated.py"), source).stdout

    def format_file(self, path: Path) -> bool:
        # ruff rewrites the file itself
        before = self._read(path)
        self._run(self.command(str(path)))
        return self._read(path) != before

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise IoError(f"failed to read file `{path}`: {e}") from e

    def _run(self, cmd: list[str], source: str | None = None) -> subprocess.CompletedProcess:
        try:
            result = subprocess.run(cmd, input=source, capture_output=True, text=True, timeout=30)
        except (subprocess.SubprocessError, OSError) as e:
            raise FormatError(f"failed to run ruff: {e}") from e

        if result.returncode != 0:
            raise FormatError(f"ruff exited with status {result.returncode}: {result.stderr.strip()}")
        return result
