import ast
import json
from pathlib import Path

import pytest

from definitions_codegen.errors import UnknownEnumReferenceError
from definitions_codegen.pipeline import CodeGeneratorConfig, OutputWriter
from definitions_codegen.pipeline.analyzer import DataFile, load_all
from definitions_codegen.pipeline.ast_backends import PythonAstBackend
from definitions_codegen.pipeline.config import GENERATED_MARKER


def load_test_data():
    """Load generation cases from JSON file"""
    test_data_path = Path(__file__).parent / "test_data" / "generation_cases.json"
    with open(test_data_path) as f:
        return json.load(f)


def generate(definitions: dict[str, str], config: CodeGeneratorConfig | None = None):
    registry = load_all([DataFile(name, text) for name, text in definitions.items()])
    return PythonAstBackend(config or CodeGeneratorConfig()).generate(registry)


def accessor(source: str, class_name: str, method: str) -> ast.FunctionDef:
    module = ast.parse(source)
    cls = next(node for node in module.body if isinstance(node, ast.ClassDef) and node.name == class_name)
    return next(node for node in cls.body if isinstance(node, ast.FunctionDef) and node.name == method)


class TestGenerationCases:
    """Data-driven checks on the generated source"""

    @pytest.mark.parametrize("test_case", load_test_data(), ids=lambda case: case["name"])
    def test_generation(self, test_case):
        config = CodeGeneratorConfig.from_dict(test_case["config"])
        output = generate(test_case["definitions"], config)
        generated_code = output[test_case["file"]]

        for expected in test_case["expected_contains"]:
            assert expected in generated_code, f"Expected {expected!r} in generated code for {test_case['name']}"
        for not_expected in test_case["expected_not_contains"]:
            assert not_expected not in generated_code, f"Expected {not_expected!r} NOT in generated code for {test_case['name']}"

        for file_name, source in output.items():
            assert source.startswith(GENERATED_MARKER)
            ast.parse(source, filename=file_name)


class TestPythonAstBackend:
    """Structure of the generated modules"""

    def test_one_module_per_group_and_manifest_last(self, definitions_dir):
        files = sorted(p for p in definitions_dir.rglob("*.ron"))
        registry = load_all([DataFile(p.stem, p.read_text()) for p in files])
        output = PythonAstBackend(CodeGeneratorConfig()).generate(registry)

        # durability.ron only adds a property, so it has no module of its own
        assert list(output) == ["item.py", "tool.py", "__init__.py"]
        assert output["__init__.py"] == (
            "# This file is @generated\n"
            "from .item import Item\n"
            "from .tool import Tool, ToolMaterial\n"
            "\n"
            "__all__ = [\n"
            '    "Item",\n'
            '    "Tool",\n'
            '    "ToolMaterial",\n'
            "]\n"
        )
        assert output.total_size() == sum(len(source) for source in output.values())

    def test_exhaustive_accessor_has_no_default(self):
        output = generate(
            {
                "tool_material": """[
                    Enum(name: "tool_material", variants: ["Wood", "Stone", "Iron", "Diamond", "Gold"]),
                    Property(
                        on: "tool_material",
                        name: "dig_multiplier",
                        type: f64,
                        mapping: {"Diamond": 8.0, "Gold": 12.0, "Iron": 6.0, "Stone": 4.0, "Wood": 2.0},
                    ),
                ]"""
            }
        )
        method = accessor(output["tool_material.py"], "ToolMaterial", "dig_multiplier")
        assert ast.unparse(method.returns) == "float"
        (match,) = method.body
        patterns = [ast.unparse(case.pattern) for case in match.cases]
        assert patterns == [
            "ToolMaterial.Diamond",
            "ToolMaterial.Gold",
            "ToolMaterial.Iron",
            "ToolMaterial.Stone",
            "ToolMaterial.Wood",
        ]

    def test_partial_accessor_ends_with_default(self):
        output = generate(
            {
                "tool_material": """[
                    Enum(name: "tool_material", variants: ["Wood", "Stone", "Iron", "Diamond", "Gold"]),
                    Property(on: "tool_material", name: "display_name", type: string, mapping: {"Diamond": "Diamond", "Gold": "Golden"}),
                ]"""
            }
        )
        method = accessor(output["tool_material.py"], "ToolMaterial", "display_name")
        assert ast.unparse(method.returns) == "str | None"
        cases = method.body[0].cases
        assert [ast.unparse(case.pattern) for case in cases] == ["ToolMaterial.Diamond", "ToolMaterial.Gold", "_"]
        assert ast.unparse(cases[-1].body[0]) == "return None"

    def test_property_on_enum_without_variants_is_partial(self):
        output = generate({"tags": 'Property(on: "ghost", name: "weight", type: u32, mapping: {"A": 1})'})
        method = accessor(output["tags.py"], "Ghost", "weight")
        assert ast.unparse(method.returns) == "int | None"

    def test_custom_type_of_undeclared_enum(self):
        with pytest.raises(UnknownEnumReferenceError, match="undeclared enum `metal`"):
            generate(
                {
                    "tool": """[
                        Enum(name: "tool", variants: ["Axe"]),
                        Property(on: "tool", name: "head", type: custom(metal), mapping: {"Axe": "Iron"}),
                    ]"""
                }
            )

    def test_custom_manifest_name(self):
        output = generate({"tool": 'Enum(name: "tool", variants: ["Axe"])'}, CodeGeneratorConfig(manifest_name="enums"))
        assert list(output) == ["tool.py", "enums.py"]

    def test_generation_is_deterministic(self, definitions_dir):
        files = sorted(definitions_dir.rglob("*.ron"))
        first = load_all([DataFile(p.stem, p.read_text()) for p in files])
        second = load_all([DataFile(p.stem, p.read_text()) for p in files])
        backend = PythonAstBackend(CodeGeneratorConfig())
        assert backend.generate(first) == backend.generate(second)


class TestGeneratedCodeRuns:
    """The generated package imports and its accessors return the mapped values"""

    def write(self, tmp_path, package, definitions, config=None):
        OutputWriter().write(generate(definitions, config), tmp_path / package)

    def test_ordinals_and_values(self, tmp_path, import_generated):
        self.write(
            tmp_path,
            "ordinals_pkg",
            {
                "tool": """[
                    Enum(name: "tool", variants: ["Axe", "Pickaxe", "Sword"]),
                    Property(on: "tool", name: "damage", type: u32, mapping: {["Axe", "Pickaxe"]: 5, "Sword": 7}),
                    Property(on: "tool", name: "is_weapon", type: bool, mapping: {"Sword": true}),
                ]"""
            },
        )
        package = import_generated("ordinals_pkg")
        Tool = package.Tool
        assert [(member.name, member.value) for member in Tool] == [("Axe", 0), ("Pickaxe", 1), ("Sword", 2)]
        assert Tool(2) is Tool.Sword
        assert Tool.Axe.damage() == 5
        assert Tool.Sword.damage() == 7
        assert Tool.Sword.is_weapon() is True
        assert Tool.Axe.is_weapon() is None

    def test_groups_referencing_each_other(self, tmp_path, import_generated):
        self.write(
            tmp_path,
            "cycle_pkg",
            {
                "block": """[
                    Enum(name: "block", variants: ["Stone", "Log"]),
                    Property(on: "block", name: "best_tool", type: custom(tool), mapping: {"Stone": "Pickaxe", "Log": "Axe"}),
                ]""",
                "tool": """[
                    Enum(name: "tool", variants: ["Axe", "Pickaxe"]),
                    Property(on: "tool", name: "breaks", type: slice<custom(block)>, mapping: {"Pickaxe": ["Stone"], "Axe": ["Log"]}),
                ]""",
            },
        )
        package = import_generated("cycle_pkg")
        assert package.Block.Stone.best_tool() is package.Tool.Pickaxe
        assert package.Tool.Axe.breaks() == (package.Block.Log,)

    def test_enum_references_without_future_import(self, tmp_path, import_generated):
        self.write(
            tmp_path,
            "eager_pkg",
            {
                "block": """[
                    Enum(name: "block", variants: ["Stone", "Log"]),
                    Property(on: "block", name: "best_tool", type: custom(tool), mapping: {"Stone": "Pickaxe"}),
                ]""",
                "tool": """[
                    Enum(name: "tool", variants: ["Axe", "Pickaxe"]),
                    Enum(name: "tool_material", variants: ["Wood", "Iron"]),
                    Property(on: "tool", name: "upgrade", type: custom(tool), mapping: {"Axe": "Pickaxe", "Pickaxe": "Pickaxe"}),
                    Property(on: "tool", name: "head", type: custom(tool_material), mapping: {"Pickaxe": "Iron"}),
                    Property(on: "tool", name: "breaks", type: slice<custom(block)>, mapping: {"Pickaxe": ["Stone"]}),
                ]""",
            },
            CodeGeneratorConfig(use_future_annotations=False),
        )
        source = (tmp_path / "eager_pkg" / "tool.py").read_text()
        assert "from __future__" not in source
        assert "def upgrade(self) -> 'Tool':" in source
        assert "def head(self) -> 'ToolMaterial | None':" in source
        assert "def breaks(self) -> 'tuple[block.Block, ...] | None':" in source

        package = import_generated("eager_pkg")
        assert package.Tool.Axe.upgrade() is package.Tool.Pickaxe
        assert package.Tool.Pickaxe.head() is package.ToolMaterial.Iron
        assert package.Tool.Pickaxe.breaks() == (package.Block.Stone,)
        assert package.Block.Stone.best_tool() is package.Tool.Pickaxe


if __name__ == "__main__":
    pytest.main([__file__])
