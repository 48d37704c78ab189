"""
Placeholder expansion over the aggregated registry.

Phase A expands enum variant lists. Enums are resolved in dependency order,
so a template may reference an enum whose variants are templates themselves.
Phase B then expands the keys and custom values of custom-typed properties
against the final variant lists. Properties of any other type are untouched.
"""

from __future__ import annotations

import logging

from ...errors import CyclicReferenceError, DefinitionsError, ExpansionError, UnknownEnumReferenceError
from ..model.nodes import TypeKind, Value
from .name_resolver import to_pascal_case
from .placeholder import Segment, expand_template, referenced_enums
from .registry import EnumDef, PropertyDef, Registry

logger = logging.getLogger(__name__)


class Expander:
    """Expands ``${EnumName}`` placeholders in place."""

    def __init__(self, registry: Registry):
        self.registry = registry
        self._resolved: set[str] = set()
        self._resolving: list[str] = []

    def expand(self) -> None:
        """Run Phase A then Phase B."""
        for enum_def in self.registry.sorted_enums():
            self._resolve_enum(enum_def)

        for enum_def in self.registry.sorted_enums():
            for prop in enum_def.properties.values():
                if prop.type.kind != TypeKind.CUSTOM:
                    continue
                try:
                    self._expand_property(prop)
                except DefinitionsError as e:
                    raise e.with_context(f"failed to expand property `{prop.name}` of enum `{enum_def.name}`")

    # Phase A

    def _resolve_enum(self, enum_def: EnumDef) -> None:
        if enum_def.name in self._resolved:
            return
        if enum_def.name in self._resolving:
            cycle = " -> ".join([*self._resolving[self._resolving.index(enum_def.name) :], enum_def.name])
            raise CyclicReferenceError(f"circular variant template references: {cycle}")

        self._resolving.append(enum_def.name)
        try:
            variants = []
            for variant in enum_def.variants:
                for name in referenced_enums(variant):
                    self._resolve_enum(self._lookup(name))
                variants.extend(expand_template(variant, self._variants_of))
        except DefinitionsError as e:
            raise e.with_context(f"failed to expand variants of enum `{enum_def.name}`")
        finally:
            self._resolving.pop()

        if len(variants) != len(enum_def.variants):
            logger.debug("Enum `%s` expanded from %d to %d variant(s)", enum_def.name, len(enum_def.variants), len(variants))

        enum_def.variants = variants
        enum_def.variants_pascal_case = [to_pascal_case(variant) for variant in variants]
        self._resolved.add(enum_def.name)

    # Phase B

    def _expand_property(self, prop: PropertyDef) -> None:
        mapping: dict[str, Value] = {}
        for key, value in prop.mapping.items():
            keys = expand_template(key, self._variants_of)
            if value.kind == TypeKind.CUSTOM:
                values = [Value(TypeKind.CUSTOM, expanded) for expanded in expand_template(value.data, self._variants_of)]
            else:
                values = [value]

            if len(values) == 1:
                values = values * len(keys)
            elif len(values) != len(keys):
                raise ExpansionError(
                    f"key `{key}` expands to {len(keys)} variant(s) but its value `{value.data}` expands to {len(values)}"
                )
            mapping.update(zip(keys, values))

        prop.mapping = dict(sorted(mapping.items()))

    def _lookup(self, name: str) -> EnumDef:
        enum_def = self.registry.get(name)
        if enum_def is None:
            raise UnknownEnumReferenceError(f"no matching enum definition for expanded expression `{name}`")
        return enum_def

    def _variants_of(self, segment: Segment) -> list[str]:
        enum_def = self.registry.get(segment.text)
        if enum_def is None:
            raise UnknownEnumReferenceError(
                f"no matching enum definition for expanded expression `{segment.text}` at column {segment.column}"
            )
        return enum_def.variants
