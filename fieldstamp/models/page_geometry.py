from __future__ import annotations
from dataclasses import dataclass

RIGHT_ANGLES = (0, 90, 180, 270)


@dataclass(frozen=True)
class PageGeometry:
    """
    Raw page box in PDF points (1 pt = 1/72 inch), origin bottom-left.

    width/height are the *unrotated* media box dimensions; rotation is the
    clockwise /Rotate angle applied when the page is displayed.
    """
    width: float
    height: float
    rotation: int = 0
    origin_x: float = 0.0
    origin_y: float = 0.0

    def __post_init__(self) -> None:
        angle = int(self.rotation) % 360
        if angle not in RIGHT_ANGLES:
            raise ValueError(f"Page rotation must be a multiple of 90 degrees, got {self.rotation}")
        object.__setattr__(self, "rotation", angle)

    @property
    def is_landscape(self) -> bool:
        return self.rotation in (90, 270)

    @property
    def effective_width(self) -> float:
        return self.height if self.is_landscape else self.width

    @property
    def effective_height(self) -> float:
        return self.width if self.is_landscape else self.height
