# fieldstamp/models/font_sizes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from .field_type import FieldType, is_signature_field_type

MIN_STANDARD_FONT_SIZE = 8.0
DEFAULT_STANDARD_FONT_SIZE = 15.0
MIN_HANDWRITING_FONT_SIZE = 20.0
DEFAULT_HANDWRITING_FONT_SIZE = 50.0


@dataclass(frozen=True)
class FontSizeRange:
    """Allowed font sizes in pt; maximum is also the size text is first measured at."""
    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"minimum font size {self.minimum} exceeds maximum {self.maximum}")

    def clamp(self, size: float) -> float:
        return max(min(size, self.maximum), self.minimum)


STANDARD_FONT_SIZES = FontSizeRange(MIN_STANDARD_FONT_SIZE, DEFAULT_STANDARD_FONT_SIZE)
HANDWRITING_FONT_SIZES = FontSizeRange(MIN_HANDWRITING_FONT_SIZE, DEFAULT_HANDWRITING_FONT_SIZE)


def font_size_range_for(field_type: Union[FieldType, str], sizes_config: Optional[object] = None) -> FontSizeRange:
    """
    Handwriting sizes for signature fields, standard sizes otherwise.
    sizes_config is a FontSizesConfig; without it the built-in limits apply.
    """
    handwriting = is_signature_field_type(field_type)
    if sizes_config is None:
        return HANDWRITING_FONT_SIZES if handwriting else STANDARD_FONT_SIZES
    if handwriting:
        return FontSizeRange(float(sizes_config.min_handwriting), float(sizes_config.default_handwriting))
    return FontSizeRange(float(sizes_config.min_standard), float(sizes_config.default_standard))
