"""
Pipeline - definition files to typed enums and property accessors.

This module provides a multi-phase architecture for compiling enum and
property declarations into Python source:

1. Phase 1 (Parser): Parse definition text into declaration nodes
2. Phase 2 (Analyzer): Aggregate declarations into a registry and expand placeholders
3. Phase 3 (AST Backend): Generate one module per group plus a manifest
4. Phase 4 (Writer): Replace the output directory with the generated files
5. Phase 5 (Formatter): Optional post-processing (ruff or black)
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig
from .generator import PipelineGenerator, compile
from .output import GeneratedOutput, OutputWriter
from .providers import DataProvider, DeclarationBatch, StaticProvider

__all__ = [
    "CodeGeneratorConfig",
    "DataProvider",
    "DeclarationBatch",
    "FormatterConfig",
    "GeneratedOutput",
    "OutputConfig",
    "OutputWriter",
    "PipelineGenerator",
    "StaticProvider",
    "compile",
]
