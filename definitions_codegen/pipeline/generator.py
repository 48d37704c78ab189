"""
Pipeline generator orchestrating every compilation phase.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..errors import DefinitionsError, IoError
from .analyzer import DataFile, RegistryValidator, load_all
from .analyzer.registry import Registry
from .analyzer.sources import DefinitionSource
from .ast_backends import PythonAstBackend
from .config import CodeGeneratorConfig
from .formatters import format_files
from .output import GeneratedOutput, OutputWriter
from .providers import DataProvider

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """
    Compiles a directory of definition files into generated Python modules.

    Pipeline phases:
    1. Collect: read definition files from the input directory
    2. Parse + Aggregate: build the enum registry
    3. Expand: resolve ``${EnumName}`` placeholders
    4. Validate: optional reference / identifier checks
    5. Generate: emit one module per group plus the manifest
    6. Write: replace the output directory
    7. Format: optional ruff / black pass over the written files
    """

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the pipeline.

        Args:
            config: Compilation configuration
        """
        self.config = config or CodeGeneratorConfig()
        self.backend = PythonAstBackend(self.config)
        self.writer = OutputWriter(self.config.output)

    def compile(self, input_dir: str | Path, output_dir: str | Path, providers: Iterable[DataProvider] = ()) -> None:
        """
        Run the whole pipeline.

        Args:
            input_dir: Directory searched recursively for definition files
            output_dir: Directory replaced by the generated package
            providers: Data providers whose batches are loaded after the files

        Raises:
            DefinitionsError: The first failure, with the failing stage and file as context
        """
        try:
            sources: list[DefinitionSource] = list(self.collect_files(input_dir))
            for provider in providers:
                sources.extend(provider.provide())
            registry = self.load(sources)
        except DefinitionsError as e:
            raise e.with_context("failed to load data")

        try:
            output = self.generate(registry)
            paths = self.writer.write(output, output_dir)
        except DefinitionsError as e:
            raise e.with_context("failed to generate code for data")

        if self.config.formatter.enabled:
            try:
                format_files(paths, self.config.formatter)
            except DefinitionsError as e:
                raise e.with_context("failed to format generated code")

    def collect_files(self, input_dir: str | Path) -> list[DataFile]:
        """
        Read every definition file below ``input_dir`` in sorted path order.

        Directories are skipped, as are hidden entries when configured and
        files with an unlisted suffix when ``input_suffixes`` is set.
        """
        input_dir = Path(input_dir)
        if not input_dir.is_dir():
            raise IoError(f"input directory `{input_dir}` does not exist")

        files = []
        for path in sorted(input_dir.rglob("*")):
            if not path.is_file() or not self._is_definition_file(path.relative_to(input_dir)):
                continue
            try:
                contents = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise IoError(f"failed to read file `{path}`: {e}") from e
            files.append(DataFile(name=path.stem, contents=contents, path=str(path)))

        logger.info("Collected %d definition file(s) from %s", len(files), input_dir)
        return files

    def _is_definition_file(self, relative: Path) -> bool:
        if self.config.ignore_hidden_files and any(part.startswith(".") for part in relative.parts):
            return False
        if self.config.input_suffixes and relative.suffix not in self.config.input_suffixes:
            return False
        return True

    def load(self, sources: Iterable[DefinitionSource]) -> Registry:
        """Aggregate, expand and optionally validate the sources."""
        registry = load_all(sources)

        validator = RegistryValidator(registry)
        try:
            if self.config.validate_references:
                validator.validate_references()
            if self.config.validate_identifiers:
                validator.validate_identifiers()
        except DefinitionsError as e:
            raise e.with_context("failed to validate data")
        return registry

    def generate(self, registry: Registry) -> GeneratedOutput:
        """Generate source for every group and the manifest without touching disk."""
        return self.backend.generate(registry)


def compile(
    input_dir: str | Path,
    output_dir: str | Path,
    providers: Iterable[DataProvider] = (),
    config: CodeGeneratorConfig | None = None,
) -> None:
    """
    Compile the definitions in ``input_dir`` into a Python package at ``output_dir``.

    Args:
        input_dir: Directory searched recursively for definition files
        output_dir: Directory replaced by the generated package
        providers: Data providers supplying extra declaration batches
        config: Compilation configuration
    """
    PipelineGenerator(config).compile(input_dir, output_dir, providers)
