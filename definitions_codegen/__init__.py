"""Definitions Code Generator

A build-time compiler that turns enum and property declarations into
Python ``IntEnum`` classes with match-based property accessors.
"""

__version__ = "1.0.0"

from .errors import DefinitionsError
from .pipeline import (
    CodeGeneratorConfig,
    DataProvider,
    DeclarationBatch,
    FormatterConfig,
    OutputConfig,
    PipelineGenerator,
    StaticProvider,
    compile,
)

__all__ = [
    "CodeGeneratorConfig",
    "DataProvider",
    "DeclarationBatch",
    "DefinitionsError",
    "FormatterConfig",
    "OutputConfig",
    "PipelineGenerator",
    "StaticProvider",
    "compile",
]
