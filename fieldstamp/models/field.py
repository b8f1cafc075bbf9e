"""
field.py

Field descriptor as handed over by the document workflow.

Position and size are percentages of the *displayed* page (i.e. after the
page rotation has been applied), measured from the top-left corner.

• from_dict() – builds the object from a camelCase or snake_case record
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .field_type import FieldType, is_signature_field_type, parse_field_type


@dataclass(frozen=True)
class Signature:
    signature_image_as_base64: Optional[str] = None
    typed_signature: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["Signature"]:
        if not data:
            return None
        return cls(
            signature_image_as_base64=_pick(data, "signatureImageAsBase64", "signature_image_as_base64"),
            typed_signature=_pick(data, "typedSignature", "typed_signature"),
        )


@dataclass(frozen=True)
class Field:
    type: FieldType
    page: int
    position_x: float
    position_y: float
    width: float
    height: float
    custom_text: str = ""
    signature: Optional[Signature] = None

    def __post_init__(self) -> None:
        # Decimal / str coming from the database are normalized to float
        object.__setattr__(self, "type", parse_field_type(self.type))
        object.__setattr__(self, "page", int(self.page))
        for name in ("position_x", "position_y", "width", "height"):
            object.__setattr__(self, name, float(getattr(self, name)))
        object.__setattr__(self, "custom_text", self.custom_text or "")

    # -------------------- Factory ------------------------------------ #
    @classmethod
    def from_dict(cls, data: dict) -> "Field":
        """Build a Field from a database or JSON record."""
        return cls(
            type=data["type"],
            page=data["page"],
            position_x=_pick(data, "positionX", "position_x"),
            position_y=_pick(data, "positionY", "position_y"),
            width=data["width"],
            height=data["height"],
            custom_text=_pick(data, "customText", "custom_text") or "",
            signature=Signature.from_dict(_pick(data, "Signature", "signature")),
        )

    # -------------------- Derived ------------------------------------ #
    @property
    def is_signature_field(self) -> bool:
        return is_signature_field_type(self.type)

    @property
    def is_inserting_image(self) -> bool:
        return (
            self.is_signature_field
            and self.signature is not None
            and isinstance(self.signature.signature_image_as_base64, str)
        )

    @property
    def text_content(self) -> str:
        if self.custom_text:
            return self.custom_text
        if self.is_signature_field and self.signature and self.signature.typed_signature:
            return self.signature.typed_signature
        return ""


def _pick(data: dict, *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None
