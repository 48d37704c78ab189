import pytest

from definitions_codegen.errors import InvalidIdentifierError, UnknownEnumReferenceError, UnknownVariantReferenceError
from definitions_codegen.pipeline.analyzer import DataFile, RegistryValidator, load_all
from definitions_codegen.pipeline.analyzer import name_resolver


def validator(*texts):
    return RegistryValidator(load_all([DataFile(f"group{i}", text) for i, text in enumerate(texts)]))


MATERIALS = 'Enum(name: "material", variants: ["Wood", "Iron"])'


class TestValidateReferences:
    """Mapping keys and custom values must name existing variants"""

    def test_valid_registry(self):
        validator(
            MATERIALS,
            'Enum(name: "tool", variants: ["Axe"])',
            'Property(on: "tool", name: "made_of", type: slice<custom(material)>, mapping: {"Axe": ["Wood", "Iron"]})',
        ).validate_references()

    def test_unknown_key(self):
        prop = 'Property(on: "material", name: "hardness", type: u32, mapping: {"Stone": 2})'
        with pytest.raises(UnknownVariantReferenceError, match="maps `Stone`, which is not a variant of enum `material`"):
            validator(MATERIALS, prop).validate_references()

    def test_unknown_custom_value(self):
        tool = 'Enum(name: "tool", variants: ["Axe"])'
        prop = 'Property(on: "tool", name: "made_of", type: custom(material), mapping: {"Axe": "Gold"})'
        with pytest.raises(UnknownVariantReferenceError, match="refers to `Gold`"):
            validator(MATERIALS, tool, prop).validate_references()

    def test_unknown_custom_value_inside_slice(self):
        tool = 'Enum(name: "tool", variants: ["Axe"])'
        prop = 'Property(on: "tool", name: "made_of", type: slice<custom(material)>, mapping: {"Axe": ["Wood", "Gold"]})'
        with pytest.raises(UnknownVariantReferenceError, match="refers to `Gold`"):
            validator(MATERIALS, tool, prop).validate_references()

    def test_custom_type_of_undeclared_enum(self):
        tool = 'Enum(name: "tool", variants: ["Axe"])'
        prop = 'Property(on: "tool", name: "made_of", type: custom(metal), mapping: {"Axe": "Iron"})'
        with pytest.raises(UnknownEnumReferenceError, match="enum `metal` is not declared"):
            validator(tool, prop).validate_references()


class TestValidateIdentifiers:
    """Names must convert to distinct identifiers"""

    def test_valid_registry(self):
        validator(MATERIALS, 'Enum(name: "tool_kind", variants: ["Axe", "class"])').validate_identifiers()

    def test_member_clash(self):
        with pytest.raises(InvalidIdentifierError, match="variants `iron_ore` and `IronOre` of enum `ore` both become `IronOre`"):
            validator('Enum(name: "ore", variants: ["iron_ore", "IronOre"])').validate_identifiers()

    def test_class_clash(self):
        with pytest.raises(InvalidIdentifierError, match="both become `ToolKind`"):
            validator('Enum(name: "tool_kind", variants: [])', 'Enum(name: "ToolKind", variants: [])').validate_identifiers()

    def test_variant_without_letters(self):
        with pytest.raises(InvalidIdentifierError, match="variant `%%` of enum `ore`"):
            validator('Enum(name: "ore", variants: ["%%"])').validate_identifiers()

    def test_variant_starting_with_digit(self):
        with pytest.raises(InvalidIdentifierError, match="got `3D`"):
            validator('Enum(name: "ore", variants: ["3d"])').validate_identifiers()

    def test_property_name(self):
        prop = 'Property(on: "material", name: "hard-ness", type: u32, mapping: {})'
        with pytest.raises(InvalidIdentifierError, match="property `hard-ness` of enum `material`"):
            validator(MATERIALS, prop).validate_identifiers()


class TestNameResolver:
    """Case conversion and escaping"""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("tool_material", "ToolMaterial"),
            ("tool-material", "ToolMaterial"),
            ("toolMaterial", "ToolMaterial"),
            ("ToolMaterial", "ToolMaterial"),
            ("TOOL_MATERIAL", "ToolMaterial"),
            ("HTTPServer", "HttpServer"),
            ("WoodPickaxe", "WoodPickaxe"),
            ("stone_2", "Stone2"),
        ],
    )
    def test_pascal_case(self, raw, expected):
        assert name_resolver.to_pascal_case(raw) == expected

    @pytest.mark.parametrize("raw,expected", [("ToolMaterial", "tool_material"), ("item-tags", "item_tags"), ("tool", "tool")])
    def test_snake_case(self, raw, expected):
        assert name_resolver.to_snake_case(raw) == expected

    def test_keywords_are_escaped(self):
        assert name_resolver.member_name("none") == "None_"
        assert name_resolver.member_name("class") == "Class"
        assert name_resolver.module_name("import") == "import_"

    def test_accessors_do_not_shadow_enum_attributes(self):
        assert name_resolver.accessor_name("name") == "name_"
        assert name_resolver.accessor_name("value") == "value_"
        assert name_resolver.accessor_name("to_bytes") == "to_bytes_"
        assert name_resolver.accessor_name("dig_multiplier") == "dig_multiplier"


if __name__ == "__main__":
    pytest.main([__file__])
