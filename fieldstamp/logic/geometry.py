"""
Coordinate helpers shared by text and image placement.

Two coordinate systems are involved:

* displayed space: the page as a viewer shows it, i.e. after the clockwise
  /Rotate has been applied. Field percentages refer to this space.
* user space: the unrotated coordinate system of the page content stream,
  origin at the lower-left corner of the media box.
"""
from __future__ import annotations

from typing import Tuple

from ..models.field import Field
from ..models.page_geometry import PageGeometry
from ..models.placement import FieldBox


def effective_page_size(geometry: PageGeometry) -> Tuple[float, float]:
    """Displayed width/height; swapped for 90/270 degree pages."""
    return geometry.effective_width, geometry.effective_height


def field_box(field: Field, geometry: PageGeometry) -> FieldBox:
    """Percent position/size -> absolute box (top-left origin) on the displayed page."""
    page_w, page_h = effective_page_size(geometry)
    return FieldBox(
        x=page_w * (field.position_x / 100),
        y=page_h * (field.position_y / 100),
        width=page_w * (field.width / 100),
        height=page_h * (field.height / 100),
    )


def fit_scale(box_w: float, box_h: float, content_w: float, content_h: float) -> float:
    """
    Uniform scale factor that fits content into the box, never above 1.
    A zero-sized content dimension does not constrain the result.
    """
    sx = box_w / content_w if content_w > 0 else float("inf")
    sy = box_h / content_h if content_h > 0 else float("inf")
    return min(sx, sy, 1.0)


def centre_in_box(box: FieldBox, content_w: float, content_h: float) -> Tuple[float, float]:
    """Top-left corner of content centred in box (top-left origin)."""
    return (
        box.x + (box.width - content_w) / 2,
        box.y + (box.height - content_h) / 2,
    )


def flip_y(top: float, height: float, page_height: float) -> float:
    """Top-left origin -> bottom-left origin for a rect of the given height."""
    return page_height - top - height


def displayed_to_user(x: float, y: float, geometry: PageGeometry) -> Tuple[float, float]:
    """
    Map a point in displayed space (bottom-left origin) to user space.

    Displaying rotates the page clockwise by /Rotate and moves it back into
    the first quadrant; this is the inverse of that transform. Content drawn
    at the returned point and rotated counter-clockwise by the same angle
    shows up upright.
    """
    w, h = geometry.width, geometry.height
    r = geometry.rotation
    if r == 0:
        u, v = x, y
    elif r == 90:
        u, v = w - y, x
    elif r == 180:
        u, v = w - x, h - y
    else:  # 270
        u, v = y, h - x
    return u + geometry.origin_x, v + geometry.origin_y
