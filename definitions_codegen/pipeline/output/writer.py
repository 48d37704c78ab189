"""
Writer that replaces the output directory with freshly generated files.

The directory is removed and recreated before anything is written, so a
failed run may leave it empty or partially populated. Each file is written
through a temporary file in the same directory and renamed into place.
"""

from __future__ import annotations

import ast
import logging
import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from ...errors import GenerationError, IoError
from ..config import OutputConfig
from .units import GeneratedOutput

logger = logging.getLogger(__name__)


class OutputWriter:
    """Writes generated units into an output directory.

    Uses a two-phase approach per file:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file

    An interrupted write never leaves a truncated generated file behind.
    """

    def __init__(self, config: OutputConfig | None = None, validate_python: Callable[[str, str], None] | None = None):
        """Initialize the writer.

        Args:
            config: Output configuration
            validate_python: Optional validation function taking (file name, source)
        """
        self.config = config or OutputConfig()
        self._validate_python = validate_python or self._default_validate_python

    def write(self, output: GeneratedOutput, directory: str | Path) -> list[Path]:
        """Clear ``directory`` and write every unit of ``output`` into it.

        Args:
            output: Ordered mapping from file name to source
            directory: Target output directory

        Returns:
            Paths of the written files, in output order

        Raises:
            GenerationError: If a unit is not valid Python
            IoError: If a filesystem operation fails
        """
        directory = Path(directory)
        self.reset_directory(directory)

        paths = []
        for file_name, source in output.items():
            if self.config.validate_before_write:
                self._validate_python(file_name, source)

            path = directory / file_name
            try:
                if self.config.atomic_write:
                    self._write_atomic(path, source)
                else:
                    path.write_text(source, encoding="utf-8")
            except OSError as e:
                raise IoError(f"failed to write file `{path}`: {e}") from e

            logger.debug("Wrote %s", path)
            paths.append(path)

        logger.info("Wrote %d file(s) to %s", len(paths), directory)
        return paths

    def reset_directory(self, directory: Path) -> None:
        """Remove ``directory`` with all its contents and create it empty."""
        try:
            if directory.is_dir() and not directory.is_symlink():
                shutil.rmtree(directory)
            elif directory.exists() or directory.is_symlink():
                directory.unlink()
            directory.mkdir(parents=True)
        except OSError as e:
            raise IoError(f"failed to create directory `{directory}`: {e}") from e

    def _write_atomic(self, path: Path, content: str) -> None:
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def _default_validate_python(self, file_name: str, content: str) -> None:
        """Default Python validation.

        Raises:
            GenerationError: If the content does not parse
        """
        try:
            ast.parse(content, filename=file_name)
        except SyntaxError as e:
            raise GenerationError(f"generated file `{file_name}` is not valid Python: {e}") from e
