# fieldstamp/logic/font_metrics.py
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Protocol, Union

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..models.field_type import FieldType, is_signature_field_type

logger = logging.getLogger(__name__)

_REGISTER_LOCK = threading.Lock()


class FontMetrics(Protocol):
    font_name: str

    def width_of_text_at_size(self, text: str, size: float) -> float: ...
    def height_at_size(self, size: float) -> float: ...
    def descent_at_size(self, size: float) -> float: ...


class ReportLabFont:
    """Metrics of a font known to reportlab (built-in Type1 or registered TTF)."""

    def __init__(self, font_name: str) -> None:
        pdfmetrics.getFont(font_name)  # KeyError for unknown faces
        self.font_name = font_name

    def width_of_text_at_size(self, text: str, size: float) -> float:
        return float(pdfmetrics.stringWidth(text, self.font_name, size))

    def height_at_size(self, size: float) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(self.font_name, size)
        return float(ascent - descent)

    def descent_at_size(self, size: float) -> float:
        _, descent = pdfmetrics.getAscentDescent(self.font_name, size)
        return float(abs(descent))

    def __repr__(self) -> str:
        return f"ReportLabFont({self.font_name!r})"


def register_ttf_font(name: str, path: Union[str, Path]) -> ReportLabFont:
    """Register a TrueType face once per process and return its metrics."""
    with _REGISTER_LOCK:
        if name not in pdfmetrics.getRegisteredFontNames():
            logger.debug(f"Registering TTF font {name} from {path}")
            pdfmetrics.registerFont(TTFont(name, str(path)))
    return ReportLabFont(name)


def resolve_field_font(field_type: Union[FieldType, str], fonts_config: Optional[object] = None) -> ReportLabFont:
    """
    Handwriting face for signature fields, the standard face otherwise.

    fonts_config is a FontsConfig. A configured handwriting_font_path wins over
    the built-in handwriting_font fallback.
    """
    standard = getattr(fonts_config, "standard_font", None) or "Helvetica"
    if not is_signature_field_type(field_type):
        return ReportLabFont(standard)

    ttf_path = (getattr(fonts_config, "handwriting_font_path", "") or "").strip()
    if ttf_path:
        path = Path(ttf_path).expanduser()
        return register_ttf_font(path.stem, path)
    return ReportLabFont(getattr(fonts_config, "handwriting_font", None) or "Helvetica-Oblique")
