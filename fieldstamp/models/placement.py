from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FieldBox:
    """Absolute field rectangle in displayed page space, origin top-left."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextPlacement:
    """
    Text block in displayed page space, origin bottom-left.
    y is the bottom edge of the block (lowest descender), not a baseline.
    """
    x: float
    y: float
    width: float
    height: float
    font_size: float
    lines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ImagePlacement:
    """Image rectangle in displayed page space, origin bottom-left."""
    x: float
    y: float
    width: float
    height: float
    scale: float = 1.0
