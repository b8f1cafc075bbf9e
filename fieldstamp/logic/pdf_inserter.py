from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from typing import Optional, Union

from pypdf import PdfReader, PdfWriter
from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from core.config.config_service import ConfigService, config_service
from .font_metrics import FontMetrics
from .geometry import displayed_to_user
from .placement import PlacementCalculator
from ..exceptions.errors import PageNotFoundError, SignatureImageError
from ..models.field import Field
from ..models.page_geometry import PageGeometry
from ..models.placement import ImagePlacement, TextPlacement

logger = logging.getLogger(__name__)


def page_geometry_of(page) -> PageGeometry:
    """Media box and /Rotate of a pypdf page."""
    box = page.mediabox
    return PageGeometry(
        width=float(box.width),
        height=float(box.height),
        rotation=int(page.rotation or 0),
        origin_x=float(box.left),
        origin_y=float(box.bottom),
    )


def decode_signature_image(data: str) -> Image.Image:
    """
    Decode a base64 PNG (plain or as data URL) into an RGBA Pillow image.
    """
    payload = data.split(",", 1)[1] if data.startswith("data:") else data
    # wrapped base64 (MIME style line breaks) is still valid input
    payload = "".join(payload.split())
    try:
        raw = base64.b64decode(payload, validate=True)
        img = Image.open(BytesIO(raw))
        img.load()
    except (binascii.Error, ValueError, OSError) as exc:
        raise SignatureImageError(f"Signature image could not be decoded: {exc}") from exc
    return img.convert("RGBA")


class PdfFieldInserter:
    def __init__(self, config: Optional[ConfigService] = None) -> None:
        cfg = config or config_service
        self._calculator = PlacementCalculator(fonts_config=cfg.fonts, sizes_config=cfg.font_sizes)

    # ------------------------------------------------------------------ #
    #  Overlay rendering                                                 #
    # ------------------------------------------------------------------ #
    @staticmethod
    def _make_overlay(geometry: PageGeometry, draw) -> bytes:
        """
        One overlay page in the target page's user space. draw(c) paints in a
        frame whose origin is the content's lower-left corner on the displayed
        page, with axes aligned to the displayed page.
        """
        buf = BytesIO()
        c = canvas.Canvas(
            buf,
            pagesize=(geometry.origin_x + geometry.width, geometry.origin_y + geometry.height),
        )
        c.saveState()
        draw(c)
        c.restoreState()
        c.save()
        return buf.getvalue()

    @staticmethod
    def _anchor(c: canvas.Canvas, x: float, y: float, geometry: PageGeometry) -> None:
        u, v = displayed_to_user(x, y, geometry)
        c.translate(u, v)
        c.rotate(geometry.rotation)

    @classmethod
    def render_text(cls, geometry: PageGeometry, placement: TextPlacement, font: FontMetrics) -> bytes:
        line_height = font.height_at_size(placement.font_size)
        descent = font.descent_at_size(placement.font_size)
        count = len(placement.lines)

        def draw(c: canvas.Canvas) -> None:
            cls._anchor(c, placement.x, placement.y, geometry)
            c.setFont(font.font_name, placement.font_size)
            for i, line in enumerate(placement.lines):
                # first line on top, baselines lifted by the descent
                c.drawString(0, (count - 1 - i) * line_height + descent, line)

        return cls._make_overlay(geometry, draw)

    @classmethod
    def render_image(cls, geometry: PageGeometry, placement: ImagePlacement, image: Image.Image) -> bytes:
        def draw(c: canvas.Canvas) -> None:
            cls._anchor(c, placement.x, placement.y, geometry)
            c.drawImage(ImageReader(image), 0, 0, width=placement.width, height=placement.height, mask="auto")

        return cls._make_overlay(geometry, draw)

    # ------------------------------------------------------------------ #
    #  Public API                                                        #
    # ------------------------------------------------------------------ #
    def insert(self, pdf: PdfWriter, field: Field) -> PdfWriter:
        """
        Draw field onto its page of pdf (in place) and return pdf.
        Raises PageNotFoundError / SignatureImageError before anything is drawn.
        """
        page_count = len(pdf.pages)
        index = field.page - 1
        if index < 0 or index >= page_count:
            raise PageNotFoundError(field.page, page_count)

        page = pdf.pages[index]
        geometry = page_geometry_of(page)

        if field.is_inserting_image:
            image = decode_signature_image(field.signature.signature_image_as_base64)
            placement = self._calculator.calculate(field, geometry, image_size=image.size)
            overlay = self.render_image(geometry, placement, image)
        else:
            font = self._calculator.font_for(field)
            placement = self._calculator.calculate(field, geometry, font=font)
            overlay = self.render_text(geometry, placement, font)

        page.merge_page(PdfReader(BytesIO(overlay)).pages[0])
        logger.info(f"Inserted {field.type.value} field on page {field.page} (rotation {geometry.rotation})")
        return pdf


def insert_field_in_pdf(pdf: PdfWriter, field: Field, *, config: Optional[ConfigService] = None) -> PdfWriter:
    return PdfFieldInserter(config).insert(pdf, field)


def insert_field_in_pdf_bytes(
    pdf: Union[bytes, bytearray],
    field: Field,
    *,
    config: Optional[ConfigService] = None,
) -> bytes:
    """Load pdf, insert field, return the serialized document."""
    writer = PdfWriter(clone_from=PdfReader(BytesIO(bytes(pdf))))
    insert_field_in_pdf(writer, field, config=config)
    out = BytesIO()
    writer.write(out)
    return out.getvalue()
