"""
Inputs of the aggregator.

A definition source has a logical name (the grouping tag of the enums it
declares) and yields a ModelFile: either by parsing text (``DataFile``) or
directly from declarations built by a data provider (``DeclarationBatch``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from ..model.nodes import Model, ModelFile
from ..model.parser import parse


class DefinitionSource(Protocol):
    name: str

    def load(self) -> ModelFile: ...


@dataclass
class DataFile:
    """Definition text read from disk."""

    name: str
    contents: str

    # Path shown in parse error locations (defaults to ``name``)
    path: str = ""

    def load(self) -> ModelFile:
        return parse(self.contents, self.path or self.name)


@dataclass
class DeclarationBatch:
    """Declarations supplied by a data provider under a logical file name."""

    name: str
    models: list[Model] = field(default_factory=list)

    def load(self) -> ModelFile:
        return ModelFile(models=list(self.models), is_multiple=True)
