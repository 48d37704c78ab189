"""
Registry node definitions.

The registry is the aggregated view of every definition file: enums keyed by
name, each carrying its variants and the properties attached to it. It is
built once per compilation, mutated in place by the expansion pass and then
handed to the backend as read-only input.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..model.nodes import Type, Value


@dataclass
class PropertyDef:
    """A named, typed per-variant lookup table."""

    name: str = ""
    type: Type = field(default_factory=Type)

    # Variant name -> value, kept sorted by variant name
    mapping: dict[str, Value] = field(default_factory=dict)

    # Source file that declared the property
    file: str = ""

    def is_exhaustive(self, variants: list[str]) -> bool:
        """Whether every variant of the owning enum has an entry."""
        return bool(variants) and all(variant in self.mapping for variant in variants)


@dataclass
class EnumDef:
    """An enum with its variants and attached properties."""

    name: str = ""
    name_pascal_case: str = ""

    variants: list[str] = field(default_factory=list)
    variants_pascal_case: list[str] = field(default_factory=list)

    # Property name -> property
    properties: dict[str, PropertyDef] = field(default_factory=dict)

    # Grouping tag: name of the source file that declared this enum
    file: str = ""

    # False while the enum only exists because a property targets it
    declared: bool = False


@dataclass
class Registry:
    """Mapping from enum names to enums."""

    enums: dict[str, EnumDef] = field(default_factory=dict)

    def get(self, name: str) -> EnumDef | None:
        return self.enums.get(name)

    def sorted_enums(self) -> list[EnumDef]:
        """Enums in name order."""
        return [self.enums[name] for name in sorted(self.enums)]
