"""
Per-output-unit builders.

The backend collects everything destined for one generated module in an
``OutputUnit`` and renders the units together once generation is complete.
"""

from __future__ import annotations

import ast
from collections import OrderedDict
from dataclasses import dataclass, field


@dataclass
class OutputUnit:
    """Builder for one generated group module."""

    # Python module name of the group
    module: str = ""

    # Sibling group modules referenced by this unit
    group_imports: set[str] = field(default_factory=set)

    # Class names listed in __all__
    exports: list[str] = field(default_factory=list)

    classes: list[ast.ClassDef] = field(default_factory=list)

    def add_class(self, node: ast.ClassDef) -> None:
        self.classes.append(node)
        self.exports.append(node.name)

    def require_group(self, module: str) -> None:
        if module != self.module:
            self.group_imports.add(module)

    @property
    def file_name(self) -> str:
        return f"{self.module}.py"


class GeneratedOutput(OrderedDict[str, str]):
    """Ordered mapping from output file name to source text."""

    def total_size(self) -> int:
        return sum(len(source) for source in self.values())
