"""
Name resolver for case conversion and reserved-name escaping.

Converts raw enum, variant and group names into Python identifiers:
PascalCase for classes and members, snake_case for modules and methods.
"""

from __future__ import annotations

import keyword
import re
from enum import IntEnum

# Attributes an IntEnum member already has; accessors must not shadow them
INT_ENUM_RESERVED = {name for name in dir(IntEnum) if not name.startswith("_")} | {"name", "value"}

# Regex for splitting words: acronyms, capitalized words, lowercase runs, digits
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def split_words(text: str) -> list[str]:
    """Split a raw name into words on separators and case boundaries."""
    return _WORD_PATTERN.findall(text)


def to_pascal_case(text: str) -> str:
    """Convert ``tool_material`` / ``TOOL-MATERIAL`` / ``toolMaterial`` to ``ToolMaterial``."""
    return "".join(word.capitalize() for word in split_words(text))


def to_snake_case(text: str) -> str:
    """Convert ``ToolMaterial`` / ``tool-material`` to ``tool_material``."""
    return "_".join(word.lower() for word in split_words(text))


def escape_reserved(name: str, reserved: set[str] | frozenset[str] = frozenset()) -> str:
    """Append an underscore to Python keywords and to names in ``reserved``."""
    if keyword.iskeyword(name) or name in reserved:
        return f"{name}_"
    return name


def class_name(name: str) -> str:
    return escape_reserved(to_pascal_case(name))


def member_name(name: str) -> str:
    return escape_reserved(to_pascal_case(name))


def accessor_name(name: str) -> str:
    return escape_reserved(name, INT_ENUM_RESERVED)


def module_name(name: str) -> str:
    return escape_reserved(to_snake_case(name))


def is_identifier(name: str) -> bool:
    """Whether ``name`` is usable as a Python identifier."""
    return name.isidentifier() and not keyword.iskeyword(name)
