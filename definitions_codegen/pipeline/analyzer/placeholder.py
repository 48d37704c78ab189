"""
Tokenizer and expander for ``${EnumName}`` placeholders.

A template is split into literal and placeholder segments. Expansion takes
the cartesian product of the referenced enums' variants, the leftmost
placeholder varying slowest (the same order as nested loops with the
leftmost loop outermost).
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass

from ...errors import PlaceholderSyntaxError

PLACEHOLDER_OPEN = "${"
PLACEHOLDER_CLOSE = "}"


@dataclass(frozen=True)
class Segment:
    """A literal run of text or a placeholder naming an enum."""

    text: str
    is_placeholder: bool = False

    # 1-indexed column of the segment start in the template
    column: int = 1


def tokenize_template(template: str) -> list[Segment]:
    """
    Split a template into segments.

    Args:
        template: Raw variant name, mapping key or custom value

    Returns:
        Segments in left-to-right order

    Raises:
        PlaceholderSyntaxError: On an unterminated or empty placeholder
    """
    segments: list[Segment] = []
    literal_start = 0
    pos = 0

    while True:
        start = template.find(PLACEHOLDER_OPEN, pos)
        if start < 0:
            break

        end = template.find(PLACEHOLDER_CLOSE, start + len(PLACEHOLDER_OPEN))
        if end < 0:
            raise PlaceholderSyntaxError(f"unterminated placeholder in `{template}` at column {start + 1}")

        name = template[start + len(PLACEHOLDER_OPEN) : end]
        if not name:
            raise PlaceholderSyntaxError(f"empty placeholder in `{template}` at column {start + 1}")

        if start > literal_start:
            segments.append(Segment(template[literal_start:start], column=literal_start + 1))
        segments.append(Segment(name, is_placeholder=True, column=start + 1))

        pos = literal_start = end + 1

    if literal_start < len(template) or not segments:
        segments.append(Segment(template[literal_start:], column=literal_start + 1))

    return segments


def has_placeholders(template: str) -> bool:
    return any(segment.is_placeholder for segment in tokenize_template(template))


def referenced_enums(template: str) -> list[str]:
    """Enum names referenced by a template, in left-to-right order."""
    return [segment.text for segment in tokenize_template(template) if segment.is_placeholder]


def expand_template(template: str, variants_of: Callable[[Segment], list[str]]) -> list[str]:
    """
    Expand every placeholder in a template.

    Args:
        template: Text possibly containing placeholders
        variants_of: Returns the concrete variants for a placeholder segment,
            raising if the enum is unknown

    Returns:
        One string per combination; ``[template]`` when there is no placeholder
    """
    segments = tokenize_template(template)
    placeholders = [segment for segment in segments if segment.is_placeholder]
    if not placeholders:
        return [template]

    choices = [variants_of(segment) for segment in placeholders]

    results = []
    for combination in itertools.product(*choices):
        substitutions = iter(combination)
        results.append("".join(next(substitutions) if segment.is_placeholder else segment.text for segment in segments))
    return results
