"""
Data provider interface.
"""

from __future__ import annotations

from ..analyzer.sources import DeclarationBatch
from .base import DataProvider, StaticProvider

__all__ = [
    "DataProvider",
    "DeclarationBatch",
    "StaticProvider",
]
