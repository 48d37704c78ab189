"""
Output units and the output directory writer.
"""

from __future__ import annotations

from .units import GeneratedOutput, OutputUnit
from .writer import OutputWriter

__all__ = [
    "GeneratedOutput",
    "OutputUnit",
    "OutputWriter",
]
