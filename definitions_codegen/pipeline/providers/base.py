"""
Data providers supply declarations built outside the definition files.

A provider turns some external dataset into ``Enum`` / ``Property``
declarations tagged with a logical file name. The batches are aggregated
exactly like parsed files and take part in expansion.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..analyzer.sources import DeclarationBatch


class DataProvider(ABC):
    """Abstract base class for declaration providers."""

    @abstractmethod
    def provide(self) -> list[DeclarationBatch]:
        """
        Build the declaration batches.

        Returns:
            Batches in the order they should be aggregated
        """


class StaticProvider(DataProvider):
    """Provider returning batches built ahead of time."""

    def __init__(self, *batches: DeclarationBatch):
        self.batches = list(batches)

    def provide(self) -> list[DeclarationBatch]:
        return list(self.batches)
