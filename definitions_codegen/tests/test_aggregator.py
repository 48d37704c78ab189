import logging

import pytest

from definitions_codegen.errors import DuplicatePropertyError, TypeMismatchError
from definitions_codegen.pipeline.analyzer import Aggregator, DataFile, DeclarationBatch, load_all
from definitions_codegen.pipeline.model import EnumModel, MappingEntry, PropertyModel, Type, TypeKind, Value

TOOL = 'Enum(name: "tool", variants: ["Axe", "Pickaxe", "Sword"])'

IS_WEAPON = """
Property(
    on: "tool",
    name: "is_weapon",
    type: bool,
    mapping: {["Sword", "Axe"]: true, "Pickaxe": false},
)
"""


class TestAggregator:
    """Registry building from several sources"""

    def test_enum_and_property(self):
        registry = Aggregator().add_all([DataFile("tool", f"[{TOOL}, {IS_WEAPON}]")])
        tool = registry.get("tool")
        assert tool.name_pascal_case == "Tool"
        assert tool.variants == ["Axe", "Pickaxe", "Sword"]
        assert tool.file == "tool"
        assert tool.declared

        prop = tool.properties["is_weapon"]
        assert prop.file == "tool"
        # Sorted by variant name
        assert list(prop.mapping) == ["Axe", "Pickaxe", "Sword"]
        assert prop.mapping["Sword"] == Value(TypeKind.BOOL, True)
        assert prop.is_exhaustive(tool.variants)

    def test_property_in_another_file(self):
        registry = Aggregator().add_all([DataFile("tool", TOOL), DataFile("weapons", IS_WEAPON)])
        tool = registry.get("tool")
        assert tool.file == "tool"
        assert tool.properties["is_weapon"].file == "weapons"

    def test_property_before_enum_declaration(self):
        registry = Aggregator().add_all([DataFile("weapons", IS_WEAPON), DataFile("tool", TOOL)])
        tool = registry.get("tool")
        assert tool.declared
        assert tool.file == "tool"
        assert "is_weapon" in tool.properties

    def test_redeclared_enum_replaces_variants_and_keeps_properties(self):
        registry = Aggregator().add_all(
            [
                DataFile("tool", f"[{TOOL}, {IS_WEAPON}]"),
                DataFile("more_tools", 'Enum(name: "tool", variants: ["Hoe"])'),
            ]
        )
        tool = registry.get("tool")
        assert tool.variants == ["Hoe"]
        assert tool.variants_pascal_case == ["Hoe"]
        assert tool.file == "more_tools"
        assert "is_weapon" in tool.properties

    def test_redeclaration_does_not_reset_properties_declared_in_between(self):
        registry = Aggregator().add_all(
            [
                DataFile("a", TOOL),
                DataFile("b", IS_WEAPON),
                DataFile("c", TOOL),
            ]
        )
        assert "is_weapon" in registry.get("tool").properties

    def test_duplicate_property_in_same_file(self):
        with pytest.raises(DuplicatePropertyError) as exc_info:
            Aggregator().add_all([DataFile("tool", f"[{TOOL}, {IS_WEAPON}, {IS_WEAPON}]")])
        assert str(exc_info.value) == (
            "failed to load data file `tool`: property `is_weapon` defined twice on enum `tool` (first declared in `tool`)"
        )

    @pytest.mark.parametrize("order", [("a", "b"), ("b", "a")])
    def test_duplicate_property_across_files(self, order):
        first, second = order
        with pytest.raises(DuplicatePropertyError) as exc_info:
            Aggregator().add_all([DataFile("tool", TOOL), DataFile(first, IS_WEAPON), DataFile(second, IS_WEAPON)])
        assert f"failed to load data file `{second}`" in str(exc_info.value)
        assert f"first declared in `{first}`" in str(exc_info.value)

    def test_same_property_name_on_different_enums(self):
        other = IS_WEAPON.replace('on: "tool"', 'on: "weapon"')
        registry = Aggregator().add_all([DataFile("tool", f"[{TOOL}, {IS_WEAPON}, {other}]")])
        assert "is_weapon" in registry.get("weapon").properties

    def test_implicit_enum_is_not_declared(self, caplog):
        with caplog.at_level(logging.WARNING):
            registry = Aggregator().add_all([DataFile("weapons", IS_WEAPON)])
        tool = registry.get("tool")
        assert not tool.declared
        assert tool.variants == []
        assert tool.file == "weapons"
        assert not tool.properties["is_weapon"].is_exhaustive(tool.variants)
        assert "Enum `tool` has properties but no declaration" in caplog.text

    def test_repeated_key_last_wins(self):
        text = 'Property(on: "tool", name: "damage", type: u32, mapping: {["Axe", "Sword"]: 3, "Axe": 5})'
        registry = Aggregator().add_all([DataFile("tool", f"[{TOOL}, {text}]")])
        mapping = registry.get("tool").properties["damage"].mapping
        assert mapping["Axe"] == Value(TypeKind.U32, 5)
        assert mapping["Sword"] == Value(TypeKind.U32, 3)

    def test_parse_error_names_the_file(self):
        broken = 'Property(on: "tool", name: "x", type: u32, mapping: {"Axe": "y"})'
        with pytest.raises(TypeMismatchError) as exc_info:
            Aggregator().add_all([DataFile("tool", TOOL), DataFile("broken", broken, path="defs/broken.ron")])
        message = str(exc_info.value)
        assert message.startswith("failed to load data file `broken`: invalid mapping value in property `x`: defs/broken.ron:1:")

    def test_declaration_batch_values_are_converted(self):
        batch = DeclarationBatch(
            "generated",
            [
                EnumModel(name="tool", variants=["Axe"]),
                PropertyModel(
                    on="tool",
                    name="damage",
                    type=Type(kind=TypeKind.F64),
                    mapping=[MappingEntry(keys=["Axe"], literal=7)],
                ),
            ],
        )
        registry = Aggregator().add_all([batch])
        assert registry.get("tool").properties["damage"].mapping == {"Axe": Value(TypeKind.F64, 7.0)}

    def test_declaration_batch_type_mismatch(self):
        batch = DeclarationBatch(
            "generated",
            [PropertyModel(on="tool", name="damage", type=Type(kind=TypeKind.U32), mapping=[MappingEntry(["Axe"], "x")])],
        )
        with pytest.raises(TypeMismatchError) as exc_info:
            Aggregator().add_all([batch])
        assert "invalid value for `Axe` in property `damage`" in str(exc_info.value)

    def test_load_all_expands(self):
        registry = load_all(
            [
                DataFile("tool", TOOL),
                DataFile("item", 'Enum(name: "item", variants: ["Stick", "Iron${tool}"])'),
            ]
        )
        assert registry.get("item").variants == ["Stick", "IronAxe", "IronPickaxe", "IronSword"]


if __name__ == "__main__":
    pytest.main([__file__])
