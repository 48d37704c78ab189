"""
Declaration model: lexer, parser and typed declaration nodes.
"""

from __future__ import annotations

from .nodes import EnumModel, MappingEntry, Model, ModelFile, PropertyModel, Type, TypeKind, Value
from .parser import ModelParser, parse
from .values import convert_literal

__all__ = [
    "EnumModel",
    "MappingEntry",
    "Model",
    "ModelFile",
    "ModelParser",
    "PropertyModel",
    "Type",
    "TypeKind",
    "Value",
    "convert_literal",
    "parse",
]
