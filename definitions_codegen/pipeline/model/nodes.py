"""
Declaration node definitions.

These nodes represent the parsed structure of a definition file before
any aggregation, expansion or language-specific processing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(Enum):
    """Kind of a property type."""

    BOOL = "bool"
    U32 = "u32"
    F64 = "f64"
    STRING = "string"
    SLICE = "slice"  # slice<T>
    CUSTOM = "custom"  # custom(enum_name)


@dataclass(frozen=True)
class Type:
    """A declared property type."""

    kind: TypeKind = TypeKind.STRING

    # Element type for slices
    item: Type | None = None

    # Target enum name for custom types (resolved after aggregation)
    enum_name: str = ""

    @staticmethod
    def slice_of(item: Type) -> Type:
        return Type(kind=TypeKind.SLICE, item=item)

    @staticmethod
    def custom(enum_name: str) -> Type:
        return Type(kind=TypeKind.CUSTOM, enum_name=enum_name)

    def __str__(self) -> str:
        if self.kind == TypeKind.SLICE:
            return f"slice<{self.item}>"
        if self.kind == TypeKind.CUSTOM:
            return f"custom({self.enum_name})"
        return self.kind.value


@dataclass(frozen=True)
class Value:
    """A literal converted under a declared type.

    ``data`` holds a bool, int, float or str, a tuple of ``Value`` for slices,
    or the referenced variant name for custom values.
    """

    kind: TypeKind
    data: Any


@dataclass
class MappingEntry:
    """One ``key(s): literal`` pair of a property mapping."""

    keys: list[str] = field(default_factory=list)

    # Raw literal: bool, int, float, str or list of raw literals
    literal: Any = None


@dataclass
class Model:
    """Base class for all declarations."""

    # Line of the declaration in its source (0 when supplied programmatically)
    line: int = 0


@dataclass
class EnumModel(Model):
    """Declares an enum and its raw variant names."""

    name: str = ""
    variants: list[str] = field(default_factory=list)


@dataclass
class PropertyModel(Model):
    """Declares a typed per-variant lookup table attached to an enum."""

    on: str = ""
    name: str = ""
    type: Type = field(default_factory=Type)
    mapping: list[MappingEntry] = field(default_factory=list)


@dataclass
class ModelFile:
    """Root of a parsed definition file: one declaration or an ordered list."""

    models: list[Model] = field(default_factory=list)
    is_multiple: bool = False
