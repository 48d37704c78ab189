"""
Python AST-based code generation backend.

Generates one module per grouping tag using the built-in ast module. Each
enum becomes an ``IntEnum`` whose member values are the declaration ordinals,
and each property becomes a method matching on ``self``:

- exhaustive properties return ``T`` with one case per variant and no default;
- partial properties return ``T | None`` and end with ``case _: return None``.
"""

from __future__ import annotations

import ast
import logging

from ...errors import UnknownEnumReferenceError
from ..analyzer import name_resolver
from ..analyzer.registry import EnumDef, PropertyDef, Registry
from ..model.nodes import Type, TypeKind, Value
from ..output.units import GeneratedOutput, OutputUnit
from .base import AstBackend

logger = logging.getLogger(__name__)


class PythonAstBackend(AstBackend):
    """Python code generation backend using AST."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    TYPE_MAP = {
        TypeKind.BOOL: "bool",
        TypeKind.U32: "int",
        TypeKind.F64: "float",
        TypeKind.STRING: "str",
    }

    def generate(self, registry: Registry) -> GeneratedOutput:
        """Generate every group module and the manifest."""
        self.registry = registry

        units: dict[str, OutputUnit] = {}
        for enum_def in registry.sorted_enums():
            module = name_resolver.module_name(enum_def.file)
            unit = units.setdefault(module, OutputUnit(module=module))
            unit.add_class(self._generate_enum_class(enum_def, unit))

        output = GeneratedOutput()
        for module in sorted(units):
            unit = units[module]
            output[unit.file_name] = self._render_unit(unit)
            logger.debug("Generated `%s` with %d enum(s)", unit.file_name, len(unit.classes))

        manifest = f"{self.config.manifest_name}.{self.FILE_EXTENSION}"
        output[manifest] = self._render_manifest([units[module] for module in sorted(units)])
        return output

    def _generate_enum_class(self, enum_def: EnumDef, unit: OutputUnit) -> ast.ClassDef:
        """Generate an IntEnum class with one method per property."""
        class_name = name_resolver.class_name(enum_def.name)

        body: list[ast.stmt] = []
        for ordinal, variant in enumerate(enum_def.variants):
            body.append(
                ast.Assign(
                    targets=[ast.Name(id=name_resolver.member_name(variant), ctx=ast.Store())],
                    value=ast.Constant(value=ordinal),
                )
            )

        for prop in enum_def.properties.values():
            body.append(self._generate_accessor(enum_def, class_name, prop, unit))

        if not body:
            body.append(ast.Pass())

        return ast.ClassDef(
            name=class_name,
            bases=[ast.Name(id="IntEnum", ctx=ast.Load())],
            keywords=[],
            body=body,
            decorator_list=[],
        )

    def _generate_accessor(self, enum_def: EnumDef, class_name: str, prop: PropertyDef, unit: OutputUnit) -> ast.FunctionDef:
        """Generate the match-based accessor method for a property."""
        exhaustive = prop.is_exhaustive(enum_def.variants)

        return_type = self.translate_type(prop.type, unit)
        if not exhaustive:
            return_type = ast.BinOp(left=return_type, op=ast.BitOr(), right=ast.Constant(value=None))
        if not self.config.use_future_annotations and self._refers_to_enum(prop.type):
            # Evaluated at class creation: the enum may not exist yet
            return_type = ast.Constant(value=ast.unparse(return_type))

        cases = []
        for variant, value in prop.mapping.items():
            pattern = ast.MatchValue(value=self._dotted(class_name, name_resolver.member_name(variant)))
            result = self.format_value(value, prop.type, unit)
            cases.append(ast.match_case(pattern=pattern, guard=None, body=[ast.Return(value=result)]))

        if not exhaustive:
            cases.append(
                ast.match_case(
                    pattern=ast.MatchAs(pattern=None, name=None),
                    guard=None,
                    body=[ast.Return(value=ast.Constant(value=None))],
                )
            )

        return ast.FunctionDef(
            name=name_resolver.accessor_name(prop.name),
            args=ast.arguments(
                posonlyargs=[],
                args=[ast.arg(arg="self", annotation=None)],
                vararg=None,
                kwonlyargs=[],
                kw_defaults=[],
                kwarg=None,
                defaults=[],
            ),
            body=[ast.Match(subject=ast.Name(id="self", ctx=ast.Load()), cases=cases)],
            decorator_list=[],
            returns=return_type,
        )

    def translate_type(self, type_: Type, unit: OutputUnit) -> ast.expr:
        """Translate a declared type to a Python annotation."""
        if type_.kind in self.TYPE_MAP:
            return ast.Name(id=self.TYPE_MAP[type_.kind], ctx=ast.Load())

        if type_.kind == TypeKind.SLICE:
            return ast.Subscript(
                value=ast.Name(id="tuple", ctx=ast.Load()),
                slice=ast.Tuple(elts=[self.translate_type(type_.item, unit), ast.Constant(value=...)], ctx=ast.Load()),
                ctx=ast.Load(),
            )

        return self._dotted(*self._enum_reference(type_.enum_name, unit))

    def format_value(self, value: Value, type_: Type, unit: OutputUnit) -> ast.expr:
        """Format a value as a Python literal expression."""
        if value.kind == TypeKind.SLICE:
            return ast.Tuple(elts=[self.format_value(item, type_.item, unit) for item in value.data], ctx=ast.Load())

        if value.kind == TypeKind.CUSTOM:
            # Not checked against the target's variants here
            return self._dotted(*self._enum_reference(type_.enum_name, unit), name_resolver.member_name(value.data))

        return ast.Constant(value=value.data)

    def _refers_to_enum(self, type_: Type) -> bool:
        if type_.kind == TypeKind.SLICE:
            return self._refers_to_enum(type_.item)
        return type_.kind == TypeKind.CUSTOM

    def _enum_reference(self, enum_name: str, unit: OutputUnit) -> list[str]:
        """Qualified name parts of an enum class, importing its group if needed."""
        target = self.registry.get(enum_name)
        if target is None:
            raise UnknownEnumReferenceError(f"custom type refers to undeclared enum `{enum_name}`")

        class_name = name_resolver.class_name(target.name)
        module = name_resolver.module_name(target.file)
        if module == unit.module:
            return [class_name]

        unit.require_group(module)
        return [module, class_name]

    def _dotted(self, *parts: str) -> ast.expr:
        """Build a ``a.b.c`` expression."""
        node: ast.expr = ast.Name(id=parts[0], ctx=ast.Load())
        for part in parts[1:]:
            node = ast.Attribute(value=node, attr=part, ctx=ast.Load())
        return node

    def _render_unit(self, unit: OutputUnit) -> str:
        prefix = self.prefix_template.render(
            generation_comment=self.config.generation_comment,
            use_future_annotations=self.config.use_future_annotations,
            group_imports=sorted(unit.group_imports),
        )

        exports = ast.Assign(
            targets=[ast.Name(id="__all__", ctx=ast.Store())],
            value=ast.List(elts=[ast.Constant(value=name) for name in unit.exports], ctx=ast.Load()),
        )
        module = ast.Module(body=[exports, *unit.classes], type_ignores=[])
        ast.fix_missing_locations(module)

        return self._post_process_code(f"{prefix.rstrip()}\n\n{ast.unparse(module)}")

    def _render_manifest(self, units: list[OutputUnit]) -> str:
        manifest = self.manifest_template.render(
            generation_comment=self.config.generation_comment,
            groups=[(unit.module, sorted(unit.exports)) for unit in units],
            exports=sorted(name for unit in units for name in unit.exports),
        )
        return f"{manifest}\n"

    def _post_process_code(self, code: str) -> str:
        """Put two blank lines before top-level classes and end with a newline."""
        result: list[str] = []
        for line in code.split("\n"):
            if line.startswith("class "):
                while result and result[-1] == "":
                    result.pop()
                result.extend(["", ""])
            result.append(line)

        return "\n".join(result).rstrip("\n") + "\n"
