"""
Frontend: aggregation of definition sources and placeholder expansion.
"""

from __future__ import annotations

from .aggregator import Aggregator, load_all
from .expander import Expander
from .registry import EnumDef, PropertyDef, Registry
from .sources import DataFile, DeclarationBatch, DefinitionSource
from .validator import RegistryValidator

__all__ = [
    "Aggregator",
    "DataFile",
    "DeclarationBatch",
    "DefinitionSource",
    "EnumDef",
    "Expander",
    "PropertyDef",
    "Registry",
    "RegistryValidator",
    "load_all",
]
