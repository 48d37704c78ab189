"""
Optional checks run on the expanded registry.

Neither check is required for generation: without them a mapping key or a
custom value naming a missing variant only fails when the generated code runs,
and a name that cannot become an identifier produces unparsable output.
"""

from __future__ import annotations

from ...errors import InvalidIdentifierError, UnknownEnumReferenceError, UnknownVariantReferenceError
from ..model.nodes import Type, TypeKind, Value
from . import name_resolver
from .registry import EnumDef, Registry


class RegistryValidator:
    """Validates variant references and identifier safety."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def validate_references(self) -> None:
        """
        Check every mapping key and custom value against the variant lists.

        Raises:
            UnknownVariantReferenceError: If a name is not a variant of its enum
            UnknownEnumReferenceError: If a custom type names an undeclared enum
        """
        for enum_def in self.registry.sorted_enums():
            variants = set(enum_def.variants)
            for prop in enum_def.properties.values():
                for key, value in prop.mapping.items():
                    if key not in variants:
                        raise UnknownVariantReferenceError(
                            f"property `{prop.name}` maps `{key}`, which is not a variant of enum `{enum_def.name}`"
                        )
                    self._check_value(value, prop.type, prop.name)

    def _check_value(self, value: Value, type_: Type, property_name: str) -> None:
        if value.kind == TypeKind.SLICE and type_.item is not None:
            for item in value.data:
                self._check_value(item, type_.item, property_name)
        elif value.kind == TypeKind.CUSTOM:
            target = self.registry.get(type_.enum_name)
            if target is None:
                raise UnknownEnumReferenceError(f"property `{property_name}` has type `{type_}` but enum `{type_.enum_name}` is not declared")
            if value.data not in target.variants:
                raise UnknownVariantReferenceError(
                    f"property `{property_name}` refers to `{value.data}`, which is not a variant of enum `{target.name}`"
                )

    def validate_identifiers(self) -> None:
        """
        Check that every name converts to a distinct, usable identifier.

        Raises:
            InvalidIdentifierError: On an empty, keyword-like or clashing identifier
        """
        classes: dict[str, str] = {}
        for enum_def in self.registry.sorted_enums():
            class_name = name_resolver.class_name(enum_def.name)
            self._check_identifier(class_name, f"enum `{enum_def.name}`")
            if class_name in classes:
                raise InvalidIdentifierError(f"enums `{classes[class_name]}` and `{enum_def.name}` both become `{class_name}`")
            classes[class_name] = enum_def.name

            self._check_identifier(name_resolver.module_name(enum_def.file), f"group `{enum_def.file}` of enum `{enum_def.name}`")
            self._check_members(enum_def)
            for prop in enum_def.properties.values():
                self._check_identifier(name_resolver.accessor_name(prop.name), f"property `{prop.name}` of enum `{enum_def.name}`")

    def _check_members(self, enum_def: EnumDef) -> None:
        seen: dict[str, str] = {}
        for variant in enum_def.variants:
            member = name_resolver.member_name(variant)
            self._check_identifier(member, f"variant `{variant}` of enum `{enum_def.name}`")
            if member in seen:
                raise InvalidIdentifierError(
                    f"variants `{seen[member]}` and `{variant}` of enum `{enum_def.name}` both become `{member}`"
                )
            seen[member] = variant

    def _check_identifier(self, identifier: str, what: str) -> None:
        if not name_resolver.is_identifier(identifier):
            raise InvalidIdentifierError(f"{what} does not produce a valid identifier (got `{identifier}`)")
