"""
Post-processing formatters for generated code.

Formatting is an explicit, optional step run over files that are already
written; generation itself never starts external processes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ...errors import FormatError
from ..config import FormatterConfig
from .base import Formatter
from .black_formatter import BlackFormatter
from .ruff_formatter import RuffFormatter

logger = logging.getLogger(__name__)

FORMATTERS: dict[str, type[Formatter]] = {
    RuffFormatter.NAME: RuffFormatter,
    BlackFormatter.NAME: BlackFormatter,
}


def get_formatter(config: FormatterConfig) -> Formatter:
    """Create the formatter selected by ``config.tool``."""
    if config.tool not in FORMATTERS:
        raise FormatError(f"unknown formatter `{config.tool}`, expected one of: {', '.join(sorted(FORMATTERS))}")
    return FORMATTERS[config.tool](config)


def format_files(paths: Iterable[Path], config: FormatterConfig, formatter: Formatter | None = None) -> None:
    """
    Format written files in place.

    Args:
        paths: Files to format
        config: Formatter configuration
        formatter: Formatter to use (defaults to the one named by ``config.tool``)

    Raises:
        FormatError: If the tool is missing or fails on a file
        IoError: If a file cannot be read or written
    """
    formatter = formatter or get_formatter(config)
    paths = list(paths)
    changed = formatter.format_paths(paths)
    logger.info("Formatted %d file(s) with %s (%d changed)", len(paths), formatter.NAME, changed)


__all__ = [
    "BlackFormatter",
    "Formatter",
    "RuffFormatter",
    "format_files",
    "get_formatter",
]
