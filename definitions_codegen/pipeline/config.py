"""
Configuration for the definitions compiler pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field

GENERATED_MARKER = "# This file is @generated"


@dataclass
class FormatterConfig:
    """Configuration for the post-processing formatter."""

    # Whether formatting is enabled
    enabled: bool = False

    # Formatter to run: "ruff" or "black"
    tool: str = "ruff"

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    # Whether to respect magic trailing commas
    magic_trailing_comma: bool = True


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        validate_before_write: Whether to parse generated code before writing it
        atomic_write: Whether to write through a temporary file and rename
    """

    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for compilation."""

    # First line of every generated file
    generation_comment: str = GENERATED_MARKER

    # Use from __future__ import annotations
    use_future_annotations: bool = True

    # Only collect input files with these suffixes (empty = every file)
    input_suffixes: list[str] = field(default_factory=list)

    # Skip files and directories whose name starts with a dot
    ignore_hidden_files: bool = True

    # Module name of the manifest that re-exports every group
    manifest_name: str = "__init__"

    # Fail when a mapping key or custom value is not a variant of its enum
    validate_references: bool = False

    # Fail when a name does not convert to a usable identifier
    validate_identifiers: bool = False

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                config.output = OutputConfig(**v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "generation_comment": self.generation_comment,
            "use_future_annotations": self.use_future_annotations,
            "input_suffixes": self.input_suffixes,
            "ignore_hidden_files": self.ignore_hidden_files,
            "manifest_name": self.manifest_name,
            "validate_references": self.validate_references,
            "validate_identifiers": self.validate_identifiers,
            "formatter": {
                "enabled": self.formatter.enabled,
                "tool": self.formatter.tool,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "string_normalization": self.formatter.string_normalization,
                "magic_trailing_comma": self.formatter.magic_trailing_comma,
            },
            "output": {
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
