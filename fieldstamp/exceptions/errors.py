"""Field stamping exceptions."""
from __future__ import annotations

from typing import Optional


class FieldInsertError(Exception):
    """Base exception for field insertion."""


class PageNotFoundError(FieldInsertError):
    """Raised when a field references a page the document does not have."""

    def __init__(self, page: int, page_count: Optional[int] = None) -> None:
        self.page = page
        self.page_count = page_count
        super().__init__(f"Page {page} does not exist")


class SignatureImageError(FieldInsertError):
    """Raised when a signature image cannot be decoded."""
