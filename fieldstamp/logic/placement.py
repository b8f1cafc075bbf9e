# fieldstamp/logic/placement.py
"""
Placement calculator: where, and how large, a field's content is drawn.

All results are in displayed page space with a bottom-left origin; mapping to
the page's user space happens when drawing (see geometry.displayed_to_user).
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

from .font_metrics import FontMetrics, resolve_field_font
from .geometry import centre_in_box, field_box, fit_scale, flip_y
from ..models.field import Field
from ..models.font_sizes import FontSizeRange, font_size_range_for
from ..models.page_geometry import PageGeometry
from ..models.placement import FieldBox, ImagePlacement, TextPlacement

logger = logging.getLogger(__name__)


def split_lines(text: str) -> Tuple[str, ...]:
    return tuple((text or "").split("\n"))


def longest_line(lines: Tuple[str, ...]) -> str:
    """Longest line by character count; the first one wins ties."""
    return max(lines, key=len) if lines else ""


def compute_text_placement(
    text: str,
    box: FieldBox,
    geometry: PageGeometry,
    font: FontMetrics,
    sizes: FontSizeRange,
) -> TextPlacement:
    lines = split_lines(text)
    widest = longest_line(lines)

    font_size = sizes.maximum
    text_width = font.width_of_text_at_size(widest, font_size)
    text_height = font.height_at_size(font_size) * len(lines)

    scale = fit_scale(box.width, box.height, text_width, text_height)
    font_size = sizes.clamp(font_size * scale)

    # measure again at the final size
    text_width = font.width_of_text_at_size(widest, font_size)
    text_height = font.height_at_size(font_size) * len(lines)

    x, top = centre_in_box(box, text_width, text_height)
    y = flip_y(top, text_height, geometry.effective_height)

    logger.debug(
        f"Text placement: box={box}, scale={scale:.4f}, font_size={font_size:.2f}, "
        f"text={text_width:.2f}x{text_height:.2f}, at=({x:.2f}, {y:.2f})"
    )
    return TextPlacement(x=x, y=y, width=text_width, height=text_height, font_size=font_size, lines=lines)


def compute_image_placement(
    image_width: float,
    image_height: float,
    box: FieldBox,
    geometry: PageGeometry,
) -> ImagePlacement:
    scale = fit_scale(box.width, box.height, image_width, image_height)
    width = image_width * scale
    height = image_height * scale

    x, top = centre_in_box(box, width, height)
    y = flip_y(top, height, geometry.effective_height)

    logger.debug(
        f"Image placement: box={box}, scale={scale:.4f}, image={width:.2f}x{height:.2f}, at=({x:.2f}, {y:.2f})"
    )
    return ImagePlacement(x=x, y=y, width=width, height=height, scale=scale)


class PlacementCalculator:
    """
    Computes the placement of one field on one page.

    fonts_config / sizes_config are the FontsConfig / FontSizesConfig
    sections of the configuration service; None means built-in defaults.
    """

    def __init__(self, *, fonts_config: Optional[object] = None, sizes_config: Optional[object] = None) -> None:
        self._fonts = fonts_config
        self._sizes = sizes_config

    def font_for(self, field: Field) -> FontMetrics:
        return resolve_field_font(field.type, self._fonts)

    def sizes_for(self, field: Field) -> FontSizeRange:
        return font_size_range_for(field.type, self._sizes)

    def calculate(
        self,
        field: Field,
        geometry: PageGeometry,
        *,
        font: Optional[FontMetrics] = None,
        image_size: Optional[Tuple[float, float]] = None,
    ) -> Union[TextPlacement, ImagePlacement]:
        """Image placement when image_size is given, text placement otherwise."""
        box = field_box(field, geometry)
        logger.debug(
            f"Field {field.type.value} on page {field.page}: rotation={geometry.rotation}, "
            f"landscape={geometry.is_landscape}, page={geometry.effective_width}x{geometry.effective_height}, "
            f"box={box}"
        )
        if image_size is not None:
            return compute_image_placement(image_size[0], image_size[1], box, geometry)
        return compute_text_placement(
            field.text_content, box, geometry, font or self.font_for(field), self.sizes_for(field)
        )
