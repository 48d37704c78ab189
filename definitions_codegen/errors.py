"""
Error types for definition parsing, aggregation, expansion and code generation.

Every error keeps its own type while it propagates; callers add context frames
(the stage or file being processed) with ``with_context`` so the final message
reads like a chain: ``failed to load data: failed to load data file `tool`: ...``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        file: Name or path of the definition file
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    file: str | Path
    line: int
    column: int

    def format(self) -> str:
        """Format as ``file:line:column``."""
        return f"{self.file}:{self.line}:{self.column}"


class DefinitionsError(Exception):
    """Base exception for all definition compiler errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        self.frames: list[str] = []
        super().__init__(message)

    def with_context(self, frame: str) -> DefinitionsError:
        """
        Add an outer context frame and return the error for re-raising.

        Args:
            frame: Description of the stage or file that was being processed

        Returns:
            The same error instance
        """
        self.frames.insert(0, frame)
        return self

    def _format_message(self) -> str:
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message

    def __str__(self) -> str:
        return ": ".join([*self.frames, self._format_message()])


class ParseError(DefinitionsError):
    """
    Raised when declaration text cannot be parsed.

    Examples:
    - Malformed syntax or unexpected tokens
    - Unknown type tag
    - Missing or unknown declaration fields
    """


class TypeMismatchError(ParseError):
    """Raised when a literal's shape is incompatible with the declared type."""


class PlaceholderSyntaxError(ParseError):
    """Raised when a ``${...}`` placeholder is malformed."""


class DuplicatePropertyError(DefinitionsError):
    """Raised when the same property name is declared twice on one enum."""


class ExpansionError(DefinitionsError):
    """Raised when placeholder expansion fails."""


class UnknownEnumReferenceError(ExpansionError):
    """Raised when a placeholder or custom type names an undeclared enum."""


class CyclicReferenceError(ExpansionError):
    """Raised when enum variant templates reference each other in a cycle."""


class ValidationError(DefinitionsError):
    """Raised by the optional post-expansion checks."""


class UnknownVariantReferenceError(ValidationError):
    """Raised when a mapping key or custom value names a variant that does not exist."""


class InvalidIdentifierError(ValidationError):
    """Raised when a name cannot be turned into a usable identifier."""


class GenerationError(DefinitionsError):
    """Raised when emitted source fails validation before being written."""


class IoError(DefinitionsError):
    """Raised when a filesystem operation fails."""


class FormatError(DefinitionsError):
    """Raised when the external formatting pass fails."""


def make_parse_error(message: str, file: str | Path, line: int, column: int) -> ParseError:
    """
    Helper to create a ParseError with location context.

    Args:
        message: Error description
        file: Source file name
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    Returns:
        ParseError with context attached
    """
    return ParseError(message, ErrorContext(file=file, line=line, column=column))
