# fieldstamp/models/field_type.py
from __future__ import annotations
from enum import Enum
from typing import Union


class FieldType(str, Enum):
    """Kinds of fields a recipient can fill in."""
    SIGNATURE = "SIGNATURE"
    FREE_SIGNATURE = "FREE_SIGNATURE"
    NAME = "NAME"
    EMAIL = "EMAIL"
    DATE = "DATE"
    TEXT = "TEXT"


_SIGNATURE_TYPES = {FieldType.SIGNATURE, FieldType.FREE_SIGNATURE}


def parse_field_type(field_type: Union[FieldType, str]) -> FieldType:
    """Enum member or its name in any case; ValueError for unknown types."""
    return FieldType(str(getattr(field_type, "value", field_type)).strip().upper())


def is_signature_field_type(field_type: Union[FieldType, str]) -> bool:
    """True for fields that are rendered with the handwriting face or as an image."""
    try:
        return parse_field_type(field_type) in _SIGNATURE_TYPES
    except ValueError:
        return False
