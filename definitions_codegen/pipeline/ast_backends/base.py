"""
Base class for AST-based code generation backends.

Defines the interface that all language-specific AST backends must implement.
"""

from __future__ import annotations

import ast
from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.registry import Registry
from ..config import CodeGeneratorConfig
from ..model.nodes import Type, Value
from ..output.units import GeneratedOutput, OutputUnit


class AstBackend(ABC):
    """Abstract base class for AST-based code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.manifest_template = self.jinja_env.get_template(f"manifest.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(self, registry: Registry) -> GeneratedOutput:
        """
        Generate every output unit plus the manifest.

        Args:
            registry: The expanded registry

        Returns:
            Ordered mapping from file name to source
        """

    @abstractmethod
    def translate_type(self, type_: Type, unit: OutputUnit) -> ast.expr:
        """
        Translate a declared type to a type annotation.

        Args:
            type_: The declared type
            unit: Unit being generated (records cross-unit imports)

        Returns:
            Type annotation expression
        """

    @abstractmethod
    def format_value(self, value: Value, type_: Type, unit: OutputUnit) -> ast.expr:
        """
        Format a value as a literal of the target language.

        Args:
            value: The converted value
            type_: The property type of the value
            unit: Unit being generated (records cross-unit imports)

        Returns:
            Literal expression
        """
