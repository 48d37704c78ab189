"""
Conversion of raw literals to typed values.
"""

from __future__ import annotations

import math
from typing import Any

from ...errors import TypeMismatchError
from .nodes import Type, TypeKind, Value

U32_MAX = 2**32 - 1


def convert_literal(literal: Any, type_: Type) -> Value:
    """
    Convert a raw literal under a declared type.

    A string literal becomes a Custom value only when the declared type is
    ``custom``. Under any other non-string type it is a mismatch, so the kind of
    a converted value always agrees with its property type.

    Args:
        literal: bool, int, float, str or list of raw literals
        type_: The declared property type

    Returns:
        Value whose kind matches the declared type

    Raises:
        TypeMismatchError: If the literal's shape cannot satisfy the type
    """
    # bool is a subclass of int, check it first
    if isinstance(literal, bool):
        if type_.kind == TypeKind.BOOL:
            return Value(TypeKind.BOOL, literal)
        raise _mismatch(literal, type_)

    if isinstance(literal, (int, float)):
        if type_.kind == TypeKind.U32:
            return Value(TypeKind.U32, _to_u32(literal, type_))
        if type_.kind == TypeKind.F64:
            return Value(TypeKind.F64, float(literal))
        raise _mismatch(literal, type_)

    if isinstance(literal, str):
        if type_.kind == TypeKind.STRING:
            return Value(TypeKind.STRING, literal)
        if type_.kind == TypeKind.CUSTOM:
            # The string names a variant of the target enum
            return Value(TypeKind.CUSTOM, literal)
        raise _mismatch(literal, type_)

    if isinstance(literal, (list, tuple)):
        if type_.kind == TypeKind.SLICE and type_.item is not None:
            return Value(TypeKind.SLICE, tuple(convert_literal(item, type_.item) for item in literal))
        raise _mismatch(literal, type_)

    raise TypeMismatchError(f"value {literal!r} is not supported for type {type_}")


def _to_u32(number: int | float, type_: Type) -> int:
    if isinstance(number, float) and not math.isfinite(number):
        raise _mismatch(number, type_)
    # Round half away from zero
    rounded = int(math.floor(number + 0.5)) if number >= 0 else -int(math.floor(-number + 0.5))
    if rounded < 0 or rounded > U32_MAX:
        raise TypeMismatchError(f"value {number!r} is out of range for type {type_}")
    return rounded


def _mismatch(literal: Any, type_: Type) -> TypeMismatchError:
    return TypeMismatchError(f"value {literal!r} is not a valid instance of type {type_}")
